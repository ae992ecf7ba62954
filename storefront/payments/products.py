"""Product and price lookups for product cards and pages."""

import asyncio
from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.core.cache import TTLCache
from storefront.core.config import settings
from storefront.core.formatting import format_price, minor_to_major
from storefront.core.locales import to_bcp47
from storefront.core.logging import get_logger
from storefront.payments.gateway import PaymentError, PaymentGateway, ProductNotFoundError
from storefront.payments.models import Price, Product

logger = get_logger(__name__)

DEFAULT_PRODUCT_LOCALE = "en-US"
NO_ACTIVE_PRICES_MESSAGE = "No active prices found for this product"
PRODUCT_NOT_FOUND_MESSAGE = "Product not found"
PRODUCT_LOOKUP_FAILED_MESSAGE = "Failed to fetch product information"


class NoActivePriceError(PaymentError):
    """Raised when a product has no active price."""


class ProductSummary(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)


class PriceSummary(BaseModel):
    """Default price of a product, in currency units."""

    id: str
    amount: float
    currency: str
    formatted: str


class ProductInfo(BaseModel):
    product: ProductSummary
    price: PriceSummary


class BatchProduct(ProductInfo):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId")


class BatchError(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    error: str


class BatchResult(BaseModel):
    products: list[BatchProduct] = Field(default_factory=list)
    errors: list[BatchError] = Field(default_factory=list)


def summarize_price(price: Price, locale: str) -> PriceSummary:
    amount = minor_to_major(price.unit_amount)
    return PriceSummary(
        id=price.id,
        amount=float(amount),
        currency=price.currency,
        formatted=format_price(amount, price.currency, to_bcp47(locale)),
    )


def lookup_error_message(exc: Exception) -> str:
    """Client-safe message for a failed product lookup."""
    if isinstance(exc, ProductNotFoundError):
        return PRODUCT_NOT_FOUND_MESSAGE
    if isinstance(exc, NoActivePriceError):
        return str(exc)
    return PRODUCT_LOOKUP_FAILED_MESSAGE


class ProductCatalog:
    """Cached product + active price lookups.

    Single and batch lookups share one cache, keyed by product id.
    """

    def __init__(
        self,
        gateway: PaymentGateway,
        cache: TTLCache[tuple[Product, tuple[Price, ...]]] | None = None,
    ) -> None:
        self.gateway = gateway
        self.cache = cache or TTLCache(
            "product",
            ttl=settings.PRODUCT_CACHE_TTL,
            maxsize=settings.PRODUCT_CACHE_SIZE,
        )

    async def fetch(self, product_id: str) -> tuple[Product, tuple[Price, ...]]:
        """Product and its active prices, from cache when fresh."""
        cached = self.cache.get(product_id)
        if cached is not None:
            return cached
        product, prices = await asyncio.gather(
            self.gateway.retrieve_product(product_id),
            self.gateway.list_active_prices(product_id),
        )
        entry = (product, tuple(prices))
        self.cache.set(product_id, entry)
        return entry

    async def get_product(
        self, product_id: str, locale: str | None = None
    ) -> ProductInfo:
        """Product with its default (first active) price.

        Raises:
            ProductNotFoundError: The product does not exist
            NoActivePriceError: The product has no active price
            PaymentError: The payment processor could not be queried
        """
        product, prices = await self.fetch(product_id)
        if not prices:
            raise NoActivePriceError(NO_ACTIVE_PRICES_MESSAGE)
        return ProductInfo(
            product=ProductSummary.model_validate(product.model_dump()),
            price=summarize_price(prices[0], locale or DEFAULT_PRODUCT_LOCALE),
        )

    async def _batch_item(self, product_id: str, locale: str | None) -> BatchProduct:
        try:
            info = await self.get_product(product_id, locale)
        except NoActivePriceError as e:
            raise NoActivePriceError(
                f"No active prices found for product {product_id}"
            ) from e
        return BatchProduct(product_id=product_id, product=info.product, price=info.price)

    async def get_products(
        self, product_ids: Sequence[str], locale: str | None = None
    ) -> BatchResult:
        """Look up several products concurrently.

        Failures are reported per product id; one failing product does not
        fail the batch.
        """
        if not product_ids:
            return BatchResult()

        results = await asyncio.gather(
            *(self._batch_item(product_id, locale) for product_id in product_ids),
            return_exceptions=True,
        )

        batch = BatchResult()
        for product_id, result in zip(product_ids, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(
                    "product_lookup_failed", product_id=product_id, error=str(result)
                )
                batch.errors.append(
                    BatchError(product_id=product_id, error=lookup_error_message(result))
                )
                continue
            batch.products.append(result)
        return batch


class ProductBatchLoader:
    """Runs one batch lookup at a time for a changing set of product ids.

    Starting a new load cancels the one in flight; the superseded load
    returns None instead of a result or an error.
    """

    def __init__(self, catalog: ProductCatalog) -> None:
        self.catalog = catalog
        self._task: Optional[asyncio.Task[BatchResult]] = None

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def load(
        self, product_ids: Sequence[str], locale: str | None = None
    ) -> Optional[BatchResult]:
        self.cancel()
        task = asyncio.ensure_future(self.catalog.get_products(product_ids, locale))
        self._task = task
        try:
            return await task
        except asyncio.CancelledError:
            if self._task is not task:
                return None
            raise
