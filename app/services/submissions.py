"""
Form submission pipeline: validate, sanitize, render and dispatch.

Each form is described by a ``SubmissionKind``; the pipeline itself knows
nothing about bookings or contacts.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Type

from pydantic import BaseModel, ValidationError

from app.core.errors import DispatchFailed, InvalidSubmission
from app.schemas.forms import BookingSubmission, ContactSubmission
from app.services import templates
from app.services.email_service import EmailService
from app.services.sanitizer import format_booking_date, header_safe, sanitize

logger = logging.getLogger(__name__)

Cleaner = Callable[[Any], str]


@dataclass(frozen=True)
class SubmissionKind:
    name: str
    schema: Type[BaseModel]
    fields: Callable[[Any, Cleaner], Dict[str, str]]
    subject: Callable[[Dict[str, str]], str]
    render_html: Callable[[Dict[str, str], str], str]
    render_text: Callable[[Dict[str, str]], str]
    success_message: str


def _booking_fields(submission: BookingSubmission, clean: Cleaner) -> Dict[str, str]:
    return {
        "first_name": clean(submission.first_name),
        "last_name": clean(submission.last_name),
        "email": clean(submission.email),
        "date": format_booking_date(submission.date),
        "time": clean(submission.time),
    }


def _contact_fields(submission: ContactSubmission, clean: Cleaner) -> Dict[str, str]:
    return {
        "name": clean(submission.name),
        "email": clean(submission.email),
        "message": clean(submission.message),
    }


BOOKING = SubmissionKind(
    name="booking",
    schema=BookingSubmission,
    fields=_booking_fields,
    subject=lambda f: header_safe(f"📅 New Booking Request — {f['first_name']} {f['last_name']}"),
    render_html=templates.render_booking_html,
    render_text=templates.render_booking_text,
    success_message="Booking confirmed! We will be in touch shortly.",
)

CONTACT = SubmissionKind(
    name="contact",
    schema=ContactSubmission,
    fields=_contact_fields,
    subject=lambda f: header_safe(f"✉️ New Message from {f['name']}"),
    render_html=templates.render_contact_html,
    render_text=templates.render_contact_text,
    success_message="Message sent! We will get back to you soon.",
)


def validate_submission(kind: SubmissionKind, payload: Any) -> BaseModel:
    """Return the parsed submission or raise InvalidSubmission.

    Which fields failed is logged, never reported back to the caller.
    """
    if not isinstance(payload, Mapping):
        logger.info(f"Rejected {kind.name} submission: body is not an object")
        raise InvalidSubmission()
    try:
        return kind.schema.model_validate(dict(payload))
    except ValidationError as e:
        invalid = sorted({".".join(str(p) for p in err["loc"]) or "body" for err in e.errors()})
        logger.info(f"Rejected {kind.name} submission: invalid fields {invalid}")
        raise InvalidSubmission() from e


def _plain(value: Any) -> str:
    return "" if value is None else str(value).strip()


async def process_submission(kind: SubmissionKind, payload: Any, email_service: EmailService, brand: str) -> str:
    """Run one submission through the pipeline and return the confirmation message."""
    submission = validate_submission(kind, payload)

    fields = kind.fields(submission, sanitize)
    message = email_service.build_message(
        subject=kind.subject(fields),
        html_body=kind.render_html(fields, brand),
        reply_to=fields["email"],
        text_body=kind.render_text(kind.fields(submission, _plain)),
    )

    if not await email_service.send_notification(message):
        raise DispatchFailed()

    logger.info(f"{kind.name.title()} email sent for {fields['email']}")
    return kind.success_message
