import os

import pytest
from fastapi.testclient import TestClient

# Keep the import-time app quiet and offline
os.environ["LOG_FILE"] = ""
os.environ.pop("MONGODB_URI", None)
os.environ.setdefault("STATIC_DIR", "public")

from app.core.config import Settings
from main import create_app


class FakeStore:
    def __init__(self, connected=True, fail_insert=False, fail_list=False):
        self.connected = connected
        self.fail_insert = fail_insert
        self.fail_list = fail_list
        self.records = []

    async def insert_contact(self, record):
        if self.fail_insert:
            raise RuntimeError("E11000 duplicate key error collection: portfolio_db.contacts")
        self.records.append(dict(record))
        return f"record-{len(self.records)}"

    async def list_contacts(self):
        if self.fail_list:
            raise RuntimeError("connection pool paused")
        # Missing timestamps sort last, like nulls in a descending Mongo sort
        ordered = sorted(
            self.records,
            key=lambda r: (r.get("createdAt") is not None, r.get("createdAt")),
            reverse=True,
        )
        return [dict(r, _id=f"id-{i}") for i, r in enumerate(ordered)]


class FakeMailer:
    def __init__(self, fail_on=None, configured=True):
        self.fail_on = fail_on
        self.configured = configured
        self.sent = []

    async def send(self, email):
        if self.fail_on is not None and len(self.sent) == self.fail_on:
            raise ConnectionRefusedError("[Errno 111] smtp.gmail.com:587 refused")
        self.sent.append(email)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        EMAIL_USER="owner@example.com",
        EMAIL_PASS="app-password",
        MONGODB_URI=None,
        STATIC_DIR=str(tmp_path / "missing"),
        LOG_FILE="",
    )


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def make_client(settings, mailer):
    def _make(store=None, mailer=mailer, settings=settings, **kwargs):
        app = create_app(settings=settings, mailer=mailer, store=store)
        return TestClient(app, **kwargs)

    return _make


@pytest.fixture
def valid_payload():
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "subject": "Hello",
        "message": "Hi there",
    }
