from fastapi import APIRouter, Depends, Request
from typing import Any
from urllib.parse import parse_qsl
import json

from app.core.errors import InvalidSubmission, PayloadTooLarge
from app.core.rate_limit import form_rate_limit
from app.schemas.forms import SubmissionResponse
from app.services.email_service import EmailService
from app.services.submissions import BOOKING, CONTACT, SubmissionKind, process_submission

router = APIRouter()


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


async def read_payload(request: Request) -> Any:
    """Parse a JSON or form-encoded body within the configured size limit"""
    max_bytes = request.app.state.settings.max_body_bytes

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_bytes:
        raise PayloadTooLarge()

    # Chunked bodies carry no length; stop reading once the limit is passed
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise PayloadTooLarge()
        chunks.append(chunk)
    body = b"".join(chunks)

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    try:
        if content_type == "application/json":
            return json.loads(body or b"null")
        if content_type == "application/x-www-form-urlencoded":
            return dict(parse_qsl(body.decode("utf-8"), keep_blank_values=True))
    except ValueError:
        raise InvalidSubmission()
    return {}


async def _handle(kind: SubmissionKind, request: Request, email_service: EmailService) -> SubmissionResponse:
    payload = await read_payload(request)
    brand = request.app.state.settings.brand_name
    message = await process_submission(kind, payload, email_service, brand)
    return SubmissionResponse(success=True, message=message)


@router.post("/booking", response_model=SubmissionResponse, dependencies=[Depends(form_rate_limit)])
async def submit_booking(request: Request, email_service: EmailService = Depends(get_email_service)):
    """Relay a booking request to the business inbox"""
    return await _handle(BOOKING, request, email_service)


@router.post("/contact", response_model=SubmissionResponse, dependencies=[Depends(form_rate_limit)])
async def submit_contact(request: Request, email_service: EmailService = Depends(get_email_service)):
    """Relay a contact message to the business inbox"""
    return await _handle(CONTACT, request, email_service)
