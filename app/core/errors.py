from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

# location prefixes FastAPI puts in front of the real field path
_LOC_SOURCES = {"body", "path", "query", "header"}
# parameter names come through as python names, body fields already carry their aliases
_PARAM_SOURCES = {"path", "query"}


class WarehouseError(ValueError):
    """Base class for errors raised by the warehouse services."""


class NotFoundError(WarehouseError):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WarehouseError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


def validation_body(message: str, field: str | None) -> dict:
    body = {"message": message}
    if field:
        body["field"] = field
    return body


def _field_from_loc(loc) -> str | None:
    parts = [str(p) for p in (loc or ())]
    if parts and parts[0] in _LOC_SOURCES:
        source, parts = parts[0], parts[1:]
        if source in _PARAM_SOURCES and parts:
            parts[0] = to_camel(parts[0])
    return ".".join(parts) or None


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": exc.message})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("rejected %s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=400, content=validation_body(exc.message, exc.field))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report only the first failing field, as {message, field}."""
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=400, content={"message": "Invalid request"})
    first = errors[0]
    message = first.get("msg") or "Invalid value"
    field = _field_from_loc(first.get("loc"))
    logger.info("invalid payload for %s %s: %s (%s)", request.method, request.url.path, message, field)
    return JSONResponse(status_code=400, content=validation_body(message, field))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)


def ensure_member(enum_cls, value, field: str) -> str:
    """Return the enum's string value or raise ValidationError naming the field."""
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field} '{value}'. Expected one of: {allowed}", field=field) from None
