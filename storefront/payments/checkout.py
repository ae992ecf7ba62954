"""Hosted checkout session creation."""

import asyncio
from collections.abc import Sequence
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.core.config import settings
from storefront.core.logging import get_logger
from storefront.payments.gateway import PaymentError, PaymentGateway
from storefront.payments.models import CheckoutSession, Product

logger = get_logger(__name__)

CHECKOUT_SESSION_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class CheckoutItem(BaseModel):
    """One product line the visitor wants to buy.

    Only ids and quantity are taken from the client; amounts come from the
    payment processor.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="productId", min_length=1)
    price_id: str = Field(..., alias="priceId", min_length=1)
    quantity: int = Field(default=1, gt=0)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def size(self) -> Optional[str]:
        size = self.metadata.get("size")
        return str(size) if size else None


def success_url(origin: str) -> str:
    return f"{origin}/success?session_id={CHECKOUT_SESSION_PLACEHOLDER}"


def cancel_url(origin: str, requested: Optional[str] = None) -> str:
    if requested:
        return requested
    return f"{origin}?canceled=true"


class CheckoutService:
    """Builds line items and opens checkout sessions."""

    def __init__(self, gateway: PaymentGateway, site_url: str | None = None) -> None:
        self.gateway = gateway
        self.site_url = (site_url or settings.SITE_URL).rstrip("/")

    async def build_line_item(self, item: CheckoutItem) -> dict[str, Any]:
        """Line item for ``item`` using the processor's price and product data."""
        price = await self.gateway.retrieve_price(item.price_id)
        if not isinstance(price.product, Product):
            raise PaymentError(f"Price {price.id} has no product")
        product = price.product

        name = f"{product.name} - Size {item.size}" if item.size else product.name
        product_data: dict[str, Any] = {
            "name": name,
            "images": product.images,
            "metadata": {
                "original_product_id": item.product_id,
                "size": item.size or "",
            },
        }
        if product.description:
            product_data["description"] = product.description

        return {
            "price_data": {
                "currency": price.currency,
                "unit_amount": price.unit_amount or 0,
                "product_data": product_data,
            },
            "quantity": item.quantity,
        }

    async def create_session(
        self,
        items: Sequence[CheckoutItem],
        origin: Optional[str] = None,
        requested_cancel_url: Optional[str] = None,
    ) -> CheckoutSession:
        """Create a payment-mode checkout session for ``items``.

        Args:
            items: Lines to buy; must not be empty
            origin: Origin of the requesting page; defaults to the site URL
            requested_cancel_url: Where to send the visitor on cancel

        Raises:
            PaymentError: A price lookup or the session creation failed
        """
        if not items:
            raise ValueError("No items provided")

        base = (origin or self.site_url).rstrip("/")
        line_items = await asyncio.gather(
            *(self.build_line_item(item) for item in items)
        )
        return await self.gateway.create_checkout_session(
            mode="payment",
            payment_method_types=["card"],
            line_items=list(line_items),
            success_url=success_url(base),
            cancel_url=cancel_url(base, requested_cancel_url),
            metadata={"items_count": str(len(items))},
        )
