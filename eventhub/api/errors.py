"""
Error translation: every failure leaves the API as ``{status, message}``.

``error_response`` is the single place an ``EventError`` becomes an HTTP
response. The exception handlers below route request validation errors,
unclassified database errors and unexpected exceptions through it.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventhub.core import errors
from eventhub.core.errors import ErrorKind, EventError
from eventhub.core.logging import get_logger
from eventhub.schemas.common import ErrorResponse

logger = get_logger(__name__)


def error_response(error: EventError) -> JSONResponse:
    body = ErrorResponse(
        status="fail" if error.is_client_error else "error",
        message=error.message,
    )
    return JSONResponse(status_code=error.status_code, content=body.model_dump())


# Error types raised by our schemas; their messages are already client-facing
SCHEMA_ERROR_TYPES = frozenset({
    "missing_fields",
    "capacity_range",
    "date_time_format",
    "missing_user_id",
    "user_id_type",
    "user_id_range",
})


def validation_message(exc: RequestValidationError) -> str:
    """The first violated rule, phrased for the client."""
    first = next(iter(exc.errors()), None)
    if first is None:
        return "Invalid request."

    error_type = first.get("type")
    loc = tuple(first.get("loc", ()))
    if error_type in SCHEMA_ERROR_TYPES:
        return first["msg"]
    if error_type == "json_invalid":
        return "Malformed JSON in request body."
    if error_type == "missing" and loc == ("body",):
        return "Request body is required."

    # Drop the "body"/"path" prefix FastAPI adds to locations
    location = [str(part) for part in loc[1:]]
    if not location:
        return f"Invalid request body: {first['msg']}."
    return f"Invalid value for '{'.'.join(location)}': {first['msg']}."


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(EventError(ErrorKind.VALIDATION, validation_message(exc)))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-raised HTTP errors (unknown route, wrong method) in the same envelope."""
    body = ErrorResponse(
        status="fail" if exc.status_code < 500 else "error",
        message=str(exc.detail),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
        headers=exc.headers,
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("database_error", error=str(exc), exc_info=exc)
    return error_response(EventError(ErrorKind.INTERNAL, errors.DATABASE_ERROR))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", error=str(exc), exc_info=exc)
    return error_response(EventError(ErrorKind.INTERNAL, errors.UNEXPECTED_ERROR))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
