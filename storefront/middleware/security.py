"""Security headers middleware."""

from collections.abc import Mapping

from fastapi import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.types import ASGIApp

from storefront.core.config import settings

HSTS_HEADER = "Strict-Transport-Security"

DEFAULT_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=()",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers that the endpoint did not set itself.

    HSTS is only sent when the site is served over HTTPS.
    """

    def __init__(
        self,
        app: ASGIApp,
        site_url: str | None = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(app)
        headers = dict(DEFAULT_SECURITY_HEADERS)
        if (site_url or settings.SITE_URL).startswith("https://"):
            headers[HSTS_HEADER] = "max-age=31536000; includeSubDomains"
        headers.update(extra_headers or {})
        self.security_headers = headers

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for header_name, header_value in self.security_headers.items():
            response.headers.setdefault(header_name, header_value)
        return response
