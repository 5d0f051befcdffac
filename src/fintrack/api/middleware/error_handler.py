"""Global error handling.

All exceptions are converted to one JSON shape:
``{error_code, message, user_message, suggestion, retry_allowed}``.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from fintrack.config import settings
from fintrack.core.errors import error_response
from fintrack.core.exceptions import FinanceAppError

logger = logging.getLogger(__name__)


def _request_extra(request: Request) -> dict:
    return {"path": request.url.path, "method": request.method}


async def handle_app_error(request: Request, exc: FinanceAppError) -> JSONResponse:
    """Handle application exceptions using the error catalog."""
    extra = {"error_code": exc.error_code, **_request_extra(request)}
    if settings.debug:
        extra["details"] = exc.details

    if exc.http_status >= 500:
        logger.error(f"Application error: {exc.error_code}", extra=extra)
    else:
        logger.info(f"Request rejected: {exc.error_code}", extra=extra)

    return JSONResponse(status_code=exc.http_status, content=error_response(exc.error_code))


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic request validation errors."""
    errors = exc.errors()
    error_messages = []
    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    extra = _request_extra(request)
    if settings.debug:
        extra["errors"] = errors
    logger.warning(f"Validation error on {request.url.path}", extra=extra)

    content = error_response("VAL_001")
    content["message"] = " | ".join(error_messages)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle database integrity errors."""
    # Do not log str(exc): it can include SQL + bound parameters.
    if settings.debug:
        logger.exception(f"Database integrity error on {request.url.path}", extra=_request_extra(request))
    else:
        logger.error(f"Database integrity error on {request.url.path}", extra=_request_extra(request))

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_response("DB_002"))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_response("DB_001")
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing internals."""
    extra = {"error_type": type(exc).__name__, **_request_extra(request)}
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_response("SYS_001")
    )
