"""Request and response models for the payment endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.payments.checkout import CheckoutItem
from storefront.payments.products import BatchError, BatchProduct


class BatchProductsRequest(BaseModel):
    """Body of a batch product lookup.

    ``productIds`` is checked by the endpoint so a non-list gets its own
    error message.
    """

    model_config = ConfigDict(populate_by_name=True)

    product_ids: Any = Field(default=None, alias="productIds")
    locale: Optional[str] = None


class BatchProductsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    products: list[BatchProduct]
    errors: Optional[list[BatchError]] = None


class CheckoutRequest(BaseModel):
    """Either a single product (``productId`` + ``priceId``) or ``items``."""

    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[str] = Field(default=None, alias="productId")
    price_id: Optional[str] = Field(default=None, alias="priceId")
    quantity: int = Field(default=1, gt=0)
    metadata: dict[str, Any] = Field(default_factory=dict)
    items: Optional[list[CheckoutItem]] = None
    cancel_url: Optional[str] = Field(default=None, alias="cancelUrl")


class CheckoutResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    url: Optional[str] = None
