import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Dict, Optional

logger = logging.getLogger(__name__)

INVALID_FORM_MESSAGE = "Invalid form data. Please check all fields."
DISPATCH_FAILED_MESSAGE = "Failed to send. Please try again or contact us directly."
ACCESS_DENIED_MESSAGE = "Access denied."
INTERNAL_ERROR_MESSAGE = "Internal server error."


class SubmissionError(Exception):
    """Base for errors that are reported to the caller as {success: false}."""

    status_code = 500
    message = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.message = message or self.message
        self.headers = headers
        super().__init__(self.message)


class InvalidSubmission(SubmissionError):
    status_code = 400
    message = INVALID_FORM_MESSAGE


class OriginDenied(SubmissionError):
    status_code = 403
    message = ACCESS_DENIED_MESSAGE


class PayloadTooLarge(SubmissionError):
    status_code = 413
    message = "Request too large."


class RateLimited(SubmissionError):
    status_code = 429
    message = "Too many requests, please try again later."


class DispatchFailed(SubmissionError):
    status_code = 500
    message = DISPATCH_FAILED_MESSAGE


def error_response(exc: SubmissionError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
        headers=exc.headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SubmissionError)
    async def submission_error_handler(request: Request, exc: SubmissionError):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(InvalidSubmission())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return error_response(SubmissionError())
