"""Payment processor gateway backed by the Stripe SDK."""

import asyncio
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

import stripe

from storefront.core.errors import ConfigurationError, StorefrontError
from storefront.core.logging import get_logger
from storefront.payments.models import CheckoutSession, Price, Product

logger = get_logger(__name__)

T = TypeVar("T")

NO_SUCH_PRODUCT = "No such product"


class PaymentError(StorefrontError):
    """Raised when the payment processor rejects or fails a request."""


class ProductNotFoundError(PaymentError):
    """Raised when the payment processor does not know a product id."""


class PaymentGateway(Protocol):
    """Operations the storefront needs from the payment processor."""

    async def retrieve_product(self, product_id: str) -> Product: ...

    async def list_active_prices(self, product_id: str) -> list[Price]: ...

    async def retrieve_price(self, price_id: str) -> Price: ...

    async def create_checkout_session(self, **params: Any) -> CheckoutSession: ...


def _to_dict(obj: Any) -> dict[str, Any]:
    if hasattr(obj, "to_dict"):
        return dict(obj.to_dict())
    return dict(obj)


class StripeGateway:
    """Stripe implementation of :class:`PaymentGateway`.

    The SDK is synchronous, so every call runs in a worker thread to keep the
    event loop free.
    """

    def __init__(self, api_key: str | None) -> None:
        self.api_key = api_key

    async def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        if not self.api_key:
            raise ConfigurationError("STRIPE_SECRET_KEY is not set")
        try:
            return await asyncio.to_thread(func, *args, api_key=self.api_key, **kwargs)
        except stripe.InvalidRequestError as e:
            if NO_SUCH_PRODUCT in str(e):
                raise ProductNotFoundError(str(e)) from e
            raise PaymentError(str(e)) from e
        except stripe.StripeError as e:
            raise PaymentError(str(e)) from e

    async def retrieve_product(self, product_id: str) -> Product:
        product = await self._call(stripe.Product.retrieve, product_id)
        return Product.model_validate(_to_dict(product))

    async def list_active_prices(self, product_id: str) -> list[Price]:
        prices = await self._call(stripe.Price.list, product=product_id, active=True)
        return [Price.model_validate(_to_dict(price)) for price in prices.data]

    async def retrieve_price(self, price_id: str) -> Price:
        """Retrieve a price with its product expanded."""
        price = await self._call(stripe.Price.retrieve, price_id, expand=["product"])
        data = _to_dict(price)
        if data.get("product") is not None and not isinstance(data["product"], str):
            data["product"] = _to_dict(data["product"])
        return Price.model_validate(data)

    async def create_checkout_session(self, **params: Any) -> CheckoutSession:
        session = CheckoutSession.model_validate(
            _to_dict(await self._call(stripe.checkout.Session.create, **params))
        )
        logger.info("checkout_session_created", session_id=session.id)
        return session
