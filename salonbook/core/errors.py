"""Domain error taxonomy and the request-boundary handlers that translate it.

Services raise these; routers never build error responses by hand.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SalonError(Exception):
    """Base class for errors that are safe to show to the caller."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.field:
            body["field"] = self.field
        return body


class AuthorizationError(SalonError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ValidationError(SalonError):
    status_code = status.HTTP_400_BAD_REQUEST


class TimeParseError(ValidationError):
    """A date or clock string did not match the expected format."""


class NotFoundError(SalonError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(SalonError):
    status_code = status.HTTP_409_CONFLICT


class ConfigurationError(SalonError):
    """Reference data is inconsistent; an administrator has to fix it."""

    status_code = 422


class RequestTimeoutError(SalonError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT


class InternalError(SalonError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _field_name(loc: tuple) -> str:
    # ("body", "designPrice") -> "designPrice"; ("path", "appointment_id") -> "appointment_id"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "request"


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn every failure into a structured response."""

    @app.exception_handler(SalonError)
    async def salon_error_handler(request: Request, exc: SalonError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.warning(
                "%s %s rejected (%d): %s",
                request.method, request.url.path, exc.status_code, exc.message,
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        fields: dict[str, list[str]] = {}
        for error in exc.errors():
            fields.setdefault(_field_name(tuple(error.get("loc", ()))), []).append(error.get("msg", "Invalid value"))
        logger.warning("Validation error for %s: %s", request.url.path, fields)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request", "fields": fields},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
