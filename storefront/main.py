"""Main FastAPI application module."""

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from storefront.api.pages.router import router as pages_router
from storefront.api.router import router as api_router
from storefront.core.config import Settings, settings
from storefront.core.events import create_lifespan
from storefront.core.logging import configure_logging
from storefront.middleware.correlation import CorrelationMiddleware
from storefront.middleware.errors import ErrorHandlingMiddleware, register_error_handlers
from storefront.middleware.locale import LocaleMiddleware
from storefront.middleware.metrics import MetricsMiddleware
from storefront.middleware.security import SecurityHeadersMiddleware


def create_app(config: Settings = settings) -> FastAPI:
    """Build the ASGI application.

    Args:
        config: Application settings

    Returns:
        The configured FastAPI application
    """
    app = FastAPI(
        title=config.app_name,
        description="Headless CMS storefront: localized pages, SEO, cart and checkout",
        version=config.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=JSONResponse,
        lifespan=create_lifespan(config),
    )

    # add_middleware wraps the existing stack, so the last one added runs
    # first. Resulting order (outermost -> innermost):
    # CORS, security headers, correlation, metrics, locale, error handling
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LocaleMiddleware, api_prefix=config.api_prefix)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, site_url=config.SITE_URL)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "x-locale", "x-lang-code"],
        max_age=600,
    )
    register_error_handlers(app)

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose Prometheus metrics."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(api_router, prefix=config.api_prefix)
    # Catch-all page route goes last
    app.include_router(pages_router)
    return app


configure_logging(level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
app = create_app()
