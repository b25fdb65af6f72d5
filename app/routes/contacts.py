from fastapi import APIRouter, Depends, Request
import json
import logging

from app.schemas.response import ErrorResponse, ListResponse, StandardResponse
from app.services.contact_service import ContactService

logger = logging.getLogger(__name__)

router = APIRouter()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_contact_service(request: Request) -> ContactService:
    return request.app.state.contact_service


async def read_payload(request: Request):
    """JSON or classic form body; anything unreadable becomes None."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        logger.warning("Rejected contact request with an unreadable body")
        return None


@router.post(
    "/contact",
    response_model=StandardResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_contact(request: Request, service: ContactService = Depends(get_contact_service)):
    payload = await read_payload(request)
    message = await service.submit(payload)
    return StandardResponse(success=True, message=message)


@router.get(
    "/contacts",
    response_model=ListResponse,
    responses={503: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_contacts(service: ContactService = Depends(get_contact_service)):
    contacts = await service.list_contacts()
    return ListResponse(data=contacts)
