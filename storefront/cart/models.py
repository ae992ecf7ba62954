"""Cart data models."""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class CartItem(BaseModel):
    """A product line in the cart.

    ``price`` is in currency units (not cents). Two lines are the same line
    when they share product id and size.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Payment processor product ID")
    name: str
    price: Decimal
    currency: str
    price_id: str = Field(..., alias="priceId")
    quantity: int = Field(default=1, gt=0)
    size: Optional[str] = None
    image: Optional[dict[str, Any]] = None
    metadata: Optional[dict[str, str]] = None

    @property
    def key(self) -> tuple[str, str]:
        return cart_key(self.id, self.size)


def cart_key(product_id: str, size: Optional[str] = None) -> tuple[str, str]:
    """Identity of a cart line."""
    return (product_id, size or "")


CART_ITEMS = TypeAdapter(list[CartItem])
