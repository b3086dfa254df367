"""
VidTube error taxonomy and the envelope-rendering exception handlers.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error. Rendered as ``{statusCode, message, success, errors}``."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors or []
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidInput(ApiError):
    status_code = 400
    default_message = "Invalid input"


class InvalidState(ApiError):
    status_code = 400
    default_message = "Operation not allowed in the current state"


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(ApiError):
    status_code = 403
    default_message = "You are not authorized to perform this action"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class Internal(ApiError):
    status_code = 500
    default_message = "Internal server error"


class StoreUnavailable(ApiError):
    status_code = 503
    default_message = "Data store unavailable"


def parse_id(value: Optional[str], label: str = "id") -> uuid.UUID:
    """Turn an opaque identifier into a UUID or raise InvalidInput."""
    if not value:
        raise InvalidInput(f"{label} is required")
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise InvalidInput(f"Invalid {label}")


def require_text(value: Optional[str], label: str) -> str:
    """Strip a required free-text field, rejecting blank values."""
    if value is None or not value.strip():
        raise InvalidInput(f"{label} is required")
    return value.strip()


def error_envelope(status_code: int, message: str, errors: Optional[List[Any]] = None) -> dict:
    return {
        "statusCode": status_code,
        "message": message,
        "success": False,
        "errors": jsonable_encoder(errors or []),
    }


def register_exception_handlers(app: FastAPI):
    """Render every failure through the uniform envelope."""

    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(exc.status_code, exc.message, exc.errors),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content=error_envelope(400, "Invalid request", errors),
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(exc.status_code, str(exc.detail)),
        )

    @app.exception_handler(SQLAlchemyError)
    async def _store_error(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Store failure on {request.method} {request.url.path}")
        if isinstance(exc, OperationalError) or (
            isinstance(exc, DBAPIError) and exc.connection_invalidated
        ):
            status = StoreUnavailable.status_code
            message = StoreUnavailable.default_message
        else:
            status = Internal.status_code
            message = Internal.default_message
        return JSONResponse(status_code=status, content=error_envelope(status, message))
