"""Domain errors and their HTTP translation.

Gateway and store code raise the exceptions below; nothing outside this module
builds error responses. `register_error_handlers` installs FastAPI handlers
that turn every `AppError` into `{"error": "<message>"}` with the error's
status code.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=500):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def payload(self) -> dict:
        return {"error": self.message}


class InvalidRequest(AppError):
    """Raised when a write request is missing required fields."""

    def __init__(self, message="Invalid data"):
        super().__init__(message, 400)


class AccessDenied(AppError):
    """The provider rejected the caller's network address (HTTP 403).

    This is a configuration problem, not a bug: the outbound address of this
    service must be allow-listed for the API key in the developer portal.
    """

    def __init__(self, message="Access Denied: IP not whitelisted in Developer Portal"):
        super().__init__(message, 403)


class NotFound(AppError):
    """The requested club or player does not exist upstream."""

    def __init__(self, message="Player not found"):
        super().__init__(message, 404)


class UpstreamError(AppError):
    """The provider answered with an unexpected status or an unreadable body."""

    def __init__(self, status, message="Brawl Stars API Error"):
        super().__init__(message, 502)
        self.upstream_status = status

    def payload(self) -> dict:
        return {"error": self.message, "upstream_status": self.upstream_status}


class TransportError(AppError):
    """The provider could not be reached (DNS, timeout, connection reset)."""

    def __init__(self, message="Could not reach the Brawl Stars API"):
        super().__init__(message, 502)


class StoreError(AppError):
    """Base class for goal store failures."""

    def __init__(self, message):
        super().__init__(message, 500)


class StoreCorrupt(StoreError):
    """The goal document exists but cannot be parsed as a JSON object."""


class StoreIOError(StoreError):
    """The goal document cannot be read or written."""


async def handle_app_error(request: Request, error: AppError):
    if isinstance(error, AccessDenied):
        logger.warning(
            "%s %s: %s (register this server's public IP, see /api/meu-ip)",
            request.method, request.url.path, error.message,
        )
    elif error.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, error, exc_info=error.__cause__)
    else:
        logger.warning("%s %s: %s", request.method, request.url.path, error.message)
    return JSONResponse(status_code=error.status_code, content=error.payload())


async def handle_validation_error(request: Request, error: RequestValidationError):
    # Malformed bodies and bad query parameters use the same {"error"} shape as
    # every other failure instead of FastAPI's default 422 detail list.
    details = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in error.errors()
    )
    logger.warning("%s %s: validation failed: %s", request.method, request.url.path, details)
    return JSONResponse(status_code=400, content={"error": f"Invalid data: {details}"})


async def handle_unexpected_error(request: Request, error: Exception):
    logger.error("%s %s: unhandled error", request.method, request.url.path, exc_info=error)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on `app`."""
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
