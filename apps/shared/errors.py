"""
Error types and secure error handling

Domain errors raised by the content write path, plus helpers for
logging unexpected failures without leaking details to clients.
"""

import logging
import uuid
from typing import Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ContentNotFoundError(LookupError):
    """No blog/project exists for the given slug."""

    def __init__(self, label: str, slug: str):
        super().__init__(f"{label} not found: {slug}")
        self.label = label
        self.slug = slug


class DuplicateTitleError(Exception):
    """Slug derived from the title collides with an existing entity."""

    def __init__(self, label: str, slug: str):
        super().__init__(f"{label} with slug '{slug}' already exists")
        self.label = label
        self.slug = slug


class InvalidTitleError(ValueError):
    """Title yields an empty slug (no letters or digits)."""


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "Blog update")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    error_id = str(uuid.uuid4())[:8]

    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error
    )

    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed or missing request fields with 400 and the first error."""
    errors = exc.errors()
    detail = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{location}: {first.get('msg')}" if location else first.get("msg", detail)
    return JSONResponse(status_code=400, content={"detail": detail})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all responder: log with an error id, return a generic 500."""
    message, error_id = log_and_sanitize_error(exc, f"{request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": message, "error_id": error_id},
    )
