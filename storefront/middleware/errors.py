"""Error handling middleware."""

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from starlette.types import ASGIApp

from storefront.cms.client import DocumentNotFoundError
from storefront.core.errors import APIError
from storefront.core.logging import get_logger
from storefront.middleware.correlation import REQUEST_ID_HEADER

logger = get_logger()

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_BODY_MESSAGE = "Invalid request body"
NOT_FOUND_MESSAGE = "Not Found"


def get_error_detail(exc: Exception) -> tuple[str, int]:
    """Get the client-visible message and status code for an exception.

    Only :class:`APIError` and HTTP exceptions expose their own message.
    """
    if isinstance(exc, APIError):
        return exc.message, exc.status_code
    if isinstance(exc, HTTPException):
        return str(exc.detail), exc.status_code
    if isinstance(exc, RequestValidationError):
        return INVALID_BODY_MESSAGE, HTTP_400_BAD_REQUEST
    if isinstance(exc, DocumentNotFoundError):
        return NOT_FOUND_MESSAGE, HTTP_404_NOT_FOUND
    return INTERNAL_ERROR_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR


def create_error_response(
    detail: str, status_code: int, correlation_id: str | None
) -> JSONResponse:
    """Create JSON error response with optional correlation ID."""
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": detail,
            "correlation_id": correlation_id if correlation_id else "unknown",
        },
        media_type="application/json",
    )
    if correlation_id:
        response.headers[REQUEST_ID_HEADER] = correlation_id
    return response


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle any exception and return a JSON response.

    The internal exception text is logged but never returned to the client.

    Args:
    ----
        request: The request that caused the exception
        exc: The exception to handle

    Returns:
    -------
        A JSON response with a client-safe error message
    """
    correlation_id = getattr(request.state, "correlation_id", None)
    detail, status_code = get_error_detail(exc)

    server_error = status_code >= HTTP_500_INTERNAL_SERVER_ERROR
    log = logger.error if server_error else logger.info
    log(
        "request_error",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        status_code=status_code,
        path=request.url.path,
        method=request.method,
        correlation_id=correlation_id,
        exc_info=exc if server_error else None,
    )
    return create_error_response(detail, status_code, correlation_id)


def register_error_handlers(app: FastAPI) -> None:
    """Route handled exception types through :func:`handle_exception`."""
    for exc_class in (APIError, HTTPException, RequestValidationError, DocumentNotFoundError):
        app.add_exception_handler(exc_class, handle_exception)  # type: ignore[arg-type]


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware that turns uncaught exceptions into JSON error responses."""

    def __init__(self, app: ASGIApp) -> None:
        """
        Initialize middleware.

        Args:
        ----
            app: The ASGI application
        """
        super().__init__(app)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """
        Process the request/response cycle and handle errors.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers or error response
        """
        try:
            return await call_next(request)
        except Exception as exc:
            return await handle_exception(request, exc)
