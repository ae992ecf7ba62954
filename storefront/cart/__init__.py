"""Shopping cart state."""

from storefront.cart.models import CartItem
from storefront.cart.storage import (
    MemoryStorage,
    RedisStorage,
    Storage,
    storage_for_session,
)
from storefront.cart.store import CartStore, CurrencyMismatchError

__all__ = [
    "CartItem",
    "CartStore",
    "CurrencyMismatchError",
    "MemoryStorage",
    "RedisStorage",
    "Storage",
    "storage_for_session",
]
