"""Correlation ID middleware for request tracking."""

import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from structlog.contextvars import bind_contextvars, clear_contextvars

REQUEST_ID_HEADER = "X-Request-ID"
TEST_ID_PREFIX = "test-"


def is_valid_correlation_id(value: str | None) -> bool:
    """Accept UUIDs, plus ``test-`` prefixed IDs sent by test clients."""
    if not value:
        return False
    if value.startswith(TEST_ID_PREFIX):
        return True
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def resolve_correlation_id(header_value: str | None) -> str:
    """Reuse a valid incoming ID, otherwise generate one."""
    if header_value and is_valid_correlation_id(header_value):
        return header_value
    return str(uuid.uuid4())


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with a correlation ID.

    The ID is stored on ``request.state``, bound to the structlog context
    and echoed in the ``X-Request-ID`` response header. Error responses
    repeat it in their body.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """
        Process the request/response cycle.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers
        """
        clear_contextvars()

        correlation_id = resolve_correlation_id(request.headers.get(REQUEST_ID_HEADER))
        bind_contextvars(correlation_id=correlation_id)
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response
