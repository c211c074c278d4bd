"""
Per-request id tracking.

The id is read from ``X-Request-ID`` when the caller sends one, generated
otherwise, bound into structlog's context for the lifetime of the request and
echoed back on the response.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

import structlog
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """
    Set the request id for the current context.

    Args:
        request_id: Id to use; a UUID4 is generated when None or blank.

    Returns:
        The id that was set.
    """
    if not request_id:
        request_id = str(uuid.uuid4())

    request_id_var.set(request_id)
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)
    return request_id


def clear_request_context() -> None:
    request_id_var.set(None)
    structlog.contextvars.clear_contextvars()


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns a request id to every request and echoes it on the response."""

    async def dispatch(self, request, call_next):
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_context()
