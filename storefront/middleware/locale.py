"""Locale detection middleware for page requests."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import HTTP_404_NOT_FOUND
from starlette.types import ASGIApp

from storefront.core.config import settings
from storefront.core.locales import get_language_code, get_locale_from_slug, split_path

LANG_CODE_HEADER = "x-lang-code"
LOCALE_HEADER = "x-locale"

BLOCKED_PATH_MARKERS = (".well-known", "devtools")
PASSTHROUGH_PATHS = ("/metrics", "/docs", "/redoc", "/openapi.json")


class LocaleMiddleware(BaseHTTPMiddleware):
    """
    Middleware that resolves the locale of page requests.

    The locale and language code are stored on ``request.state`` and echoed
    in the ``x-locale`` / ``x-lang-code`` response headers. API and tooling
    paths are passed through untouched.
    """

    def __init__(self, app: ASGIApp, api_prefix: str | None = None) -> None:
        """
        Initialize middleware.

        Args:
        ----
            app: The ASGI application
            api_prefix: Mount point of the JSON API
        """
        super().__init__(app)
        self.api_prefix = (api_prefix or settings.api_prefix).rstrip("/")

    def _is_passthrough(self, path: str) -> bool:
        if self.api_prefix and (
            path == self.api_prefix or path.startswith(f"{self.api_prefix}/")
        ):
            return True
        return path.startswith(PASSTHROUGH_PATHS)

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
        path = request.url.path
        if any(marker in path for marker in BLOCKED_PATH_MARKERS):
            return Response(status_code=HTTP_404_NOT_FOUND)

        if self._is_passthrough(path):
            return await call_next(request)

        locale = get_locale_from_slug(split_path(path))
        lang_code = get_language_code(locale)
        request.state.locale = locale
        request.state.lang_code = lang_code

        response = await call_next(request)
        response.headers[LANG_CODE_HEADER] = lang_code
        response.headers[LOCALE_HEADER] = locale
        return response
