"""
FastAPI exception handlers for structured error responses.

Validation failures never reach these handlers: the pipeline reports them
inside the ValidationOutcome. These cover malformed requests and
unexpected transport-level errors only. Bodies follow ErrorResponse.
"""

import structlog
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ccda_validation.api.models import ErrorResponse

logger = structlog.get_logger(__name__)


def error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle invalid request format (missing form fields, bad JSON body).

    Maps to 400 Bad Request (client error).
    """
    logger.warning("Invalid request format", errors=len(exc.errors()))

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        ErrorResponse(
            error="invalid_request",
            message="Request validation failed",
            details=jsonable_encoder(exc.errors()),
        ),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            error="internal_error",
            message="An unexpected error occurred",
        ),
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
