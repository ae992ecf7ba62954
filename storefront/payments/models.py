"""Payment processor objects used by the storefront."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)


class Price(BaseModel):
    """A price; ``unit_amount`` is in minor units (cents)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    unit_amount: Optional[int] = None
    currency: str
    product: Union[Product, str, None] = None


class CheckoutSession(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    url: Optional[str] = None
