"""Application startup and shutdown events."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Optional, cast

import httpx
from prometheus_client import Counter

from storefront.cms.client import CMSClient
from storefront.core.config import Settings, settings
from storefront.mail.client import ResendMailer
from storefront.mail.contact import ContactMailer
from storefront.payments.checkout import CheckoutService
from storefront.payments.gateway import PaymentGateway, StripeGateway
from storefront.payments.products import ProductCatalog
from storefront.seo.hreflang import HreflangGenerator

# Prometheus metrics
REQUESTS_TOTAL = Counter(
    "storefront_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "path"],
)

RESPONSES_TOTAL = Counter(
    "storefront_http_responses_total",
    "Total number of HTTP responses",
    labelnames=["status_code"],
)

logger: logging.Logger = logging.getLogger("storefront.core.events")


class AppState:
    """Shared collaborators created at startup."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        cms: CMSClient,
        payments: PaymentGateway,
        catalog: ProductCatalog,
        checkout: CheckoutService,
        contact_mailer: ContactMailer,
        hreflang: HreflangGenerator,
    ) -> None:
        self.http_client = http_client
        self.cms = cms
        self.payments = payments
        self.catalog = catalog
        self.checkout = checkout
        self.contact_mailer = contact_mailer
        self.hreflang = hreflang

    async def close(self) -> None:
        await self.http_client.aclose()


def build_app_state(
    config: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
    payments: Optional[PaymentGateway] = None,
) -> AppState:
    """Wire up the application's collaborators from configuration.

    Args:
        config: Application settings
        http_client: HTTP client for the CMS and mail APIs; created if omitted
        payments: Payment gateway; a Stripe gateway if omitted

    Returns:
        The assembled application state
    """
    client = http_client or httpx.AsyncClient(timeout=config.CMS_TIMEOUT)
    cms = CMSClient(
        client,
        config.cms_api_url,
        access_token=config.CMS_ACCESS_TOKEN,
        max_retries=config.CMS_MAX_RETRIES,
    )
    gateway = payments or StripeGateway(config.STRIPE_SECRET_KEY)
    return AppState(
        http_client=client,
        cms=cms,
        payments=gateway,
        catalog=ProductCatalog(gateway),
        checkout=CheckoutService(gateway, site_url=config.SITE_URL),
        contact_mailer=ContactMailer(
            ResendMailer(client, config.RESEND_API_KEY),
            from_email=config.FROM_EMAIL,
            to_email=config.TO_EMAIL,
            subject=config.EMAIL_SUBJECT,
        ),
        hreflang=HreflangGenerator(cms, site_url=config.SITE_URL),
    )


def create_start_app_handler(
    app: Any, config: Settings = settings
) -> Callable[[], Awaitable[None]]:
    """Create startup event handler.

    Args:
        app: FastAPI application instance
        config: Settings the services are built from

    Returns:
        Startup handler function
    """

    async def start_app() -> None:
        if getattr(app.state, "services", None) is None:
            app.state.services = build_app_state(config)

        if not config.STRIPE_SECRET_KEY:
            logger.warning("STRIPE_SECRET_KEY is not set; checkout is disabled")
        if not config.RESEND_API_KEY:
            logger.warning("RESEND_API_KEY is not set; contact form is disabled")

        logger.info(
            "Application startup complete - "
            f"CMS: {config.cms_api_url}, "
            f"Locales: {', '.join(config.SUPPORTED_LOCALES)}"
        )

    return start_app


def create_stop_app_handler(app: Any) -> Callable[[], Awaitable[None]]:
    """Create shutdown event handler.

    Args:
        app: FastAPI application instance

    Returns:
        Shutdown handler function
    """

    async def stop_app() -> None:
        state = cast(Optional[AppState], getattr(app.state, "services", None))
        try:
            if state is not None:
                logger.info("Closing HTTP client...")
                await state.close()
            logger.info("Application shutdown complete")
        except Exception as e:
            logger.error(f"Error during shutdown: {e}")
            raise

    return stop_app


def create_lifespan(
    config: Settings = settings,
) -> Callable[[Any], AbstractAsyncContextManager[None]]:
    """Create the application lifespan.

    Services are built from ``config`` on startup unless already set on
    ``app.state.services``, and closed on shutdown.

    Args:
        config: Application settings

    Returns:
        Lifespan context manager factory for ``FastAPI(lifespan=...)``
    """

    @asynccontextmanager
    async def lifespan(app: Any) -> AsyncIterator[None]:
        await create_start_app_handler(app, config)()
        try:
            yield
        finally:
            await create_stop_app_handler(app)()

    return lifespan
