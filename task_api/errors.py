import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .schemas.task import FIELD_ERROR_MESSAGES

logger = logging.getLogger(__name__)


def _field_name(error: dict) -> str:
    loc = error.get("loc") or ()
    # ("body", "title") -> "title"; ("body",) or ("body", <json offset>) -> "body"
    if len(loc) > 1 and isinstance(loc[-1], str):
        return loc[-1]
    return str(loc[0]) if loc else "body"


def format_validation_errors(errors) -> list:
    """Turn pydantic error entries into ``[{"field", "message"}]``."""
    formatted = []
    for error in errors:
        field = _field_name(error)
        message = FIELD_ERROR_MESSAGES.get((field, error.get("type")), error.get("msg"))
        formatted.append({"field": field, "message": message})
    return formatted


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
