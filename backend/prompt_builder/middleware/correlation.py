"""Correlation ID middleware for request tracing.

Every response carries an X-Request-ID header. A client-supplied value is
echoed back after trimming whitespace and capping it at MAX_REQUEST_ID_LENGTH
characters; a missing or blank one is replaced by a new UUID. The same id is
attached to every structlog entry written while the request is handled.
"""

import uuid

from asgi_correlation_id import CorrelationIdMiddleware
from asgi_correlation_id.context import correlation_id
from fastapi import FastAPI

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def new_request_id() -> str:
    return str(uuid.uuid4())


def normalize_request_id(value: str) -> str:
    """Trim and cap a client-supplied id; blank input gets a fresh UUID."""
    value = value.strip()[:MAX_REQUEST_ID_LENGTH]
    return value or new_request_id()


def setup_correlation_middleware(app: FastAPI) -> None:
    """Add correlation ID middleware to the FastAPI app."""
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name=REQUEST_ID_HEADER,
        generator=new_request_id,
        validator=None,
        transformer=normalize_request_id,
    )


def get_correlation_id() -> str | None:
    """Return the current request's correlation ID, or None outside a request."""
    try:
        return correlation_id.get()
    except LookupError:
        return None


__all__ = ["setup_correlation_middleware", "get_correlation_id", "normalize_request_id"]
