from datetime import datetime, timedelta, timezone

from conftest import FakeStore


def test_health(make_client):
    client = make_client()

    resp = client.get("/api/health")

    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "OK"
    assert data["message"] == "Portfolio Backend is running!"
    assert data["timestamp"].endswith("Z")
    datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))


def test_contacts_unavailable_without_store(make_client):
    client = make_client()

    resp = client.get("/api/contacts")

    assert resp.status_code == 503
    assert resp.json() == {"success": False, "message": "Database not connected"}


def test_contacts_unavailable_when_store_disconnected(make_client):
    store = FakeStore(connected=False)
    store.records.append({"name": "stale"})
    client = make_client(store=store)

    resp = client.get("/api/contacts")

    assert resp.status_code == 503
    assert "data" not in resp.json()


def test_contacts_listed_newest_first(make_client, store, valid_payload):
    base = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    for offset in (2, 0, 5, 1):
        store.records.append(dict(valid_payload, status="new", createdAt=base + timedelta(hours=offset)))
    client = make_client(store=store)

    resp = client.get("/api/contacts")

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    stamps = [datetime.fromisoformat(c["createdAt"].replace("Z", "+00:00")) for c in body["data"]]
    assert stamps == sorted(stamps, reverse=True)
    assert len(stamps) == 4
    first = body["data"][0]
    assert first["_id"] == "id-0"
    assert first["status"] == "new"
    assert first["email"] == "jane@example.com"


def test_submitted_contact_shows_up_in_listing(make_client, store, valid_payload):
    client = make_client(store=store)

    client.post("/api/contact", json=valid_payload)
    client.post("/api/contact", json=dict(valid_payload, subject="Second"))
    resp = client.get("/api/contacts")

    data = resp.json()["data"]
    assert sorted(c["subject"] for c in data) == ["Hello", "Second"]
    assert data[0]["createdAt"] >= data[1]["createdAt"]


def test_contacts_query_failure(make_client):
    client = make_client(store=FakeStore(fail_list=True))

    resp = client.get("/api/contacts")

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Failed to fetch contacts"}


def test_unknown_route(make_client):
    client = make_client()

    for method, path in [("get", "/api/nope"), ("post", "/api/unknown"), ("get", "/api/contact"), ("delete", "/api/contacts")]:
        resp = getattr(client, method)(path)
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Route not found"}


def test_uncaught_error_returns_generic_message(make_client):
    client = make_client(raise_server_exceptions=False)

    @client.app.get("/api/boom")
    async def boom():
        raise KeyError("secret internal detail")

    resp = client.get("/api/boom")

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}
    assert "secret" not in resp.text


def test_cors_allows_client_url(make_client):
    client = make_client()

    resp = client.options(
        "/api/contact",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_contacts_listed_as_stored(make_client, store, valid_payload):
    store.records.append(dict(valid_payload, status="read", createdAt=datetime(2024, 5, 1, tzinfo=timezone.utc)))
    store.records.append(dict(valid_payload, subject="Legacy", status="archived"))
    client = make_client(store=store)

    resp = client.get("/api/contacts")

    assert resp.status_code == 200
    first, legacy = resp.json()["data"]
    assert first["status"] == "read"
    assert first["createdAt"] == "2024-05-01T00:00:00Z"
    assert legacy["subject"] == "Legacy"
    assert legacy["status"] == "archived"
    assert "createdAt" not in legacy
    assert "created_at" not in legacy


def test_legacy_string_timestamp_is_not_rewritten(make_client, store, valid_payload):
    store.records.append(dict(valid_payload, createdAt="2020-01-01"))
    client = make_client(store=store)

    resp = client.get("/api/contacts")

    assert resp.status_code == 200
    assert resp.json()["data"][0]["createdAt"] == "2020-01-01"
