"""Cart state store."""

import json
import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Optional

from pydantic import ValidationError

from storefront.cart.models import CART_ITEMS, CartItem, cart_key
from storefront.cart.storage import Storage
from storefront.core.errors import StorefrontError
from storefront.core.formatting import format_price

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart-items"
DEFAULT_CURRENCY = "usd"

Listener = Callable[[list[CartItem]], None]


class CurrencyMismatchError(StorefrontError):
    """Raised when an item's currency differs from the cart's currency."""

    def __init__(self, cart_currency: str, item_currency: str) -> None:
        super().__init__(
            f"Cannot add {item_currency.upper()} item to a {cart_currency.upper()} cart"
        )
        self.cart_currency = cart_currency
        self.item_currency = item_currency


class CartStore:
    """Ordered collection of cart lines persisted to a storage backend.

    Nothing is written until :meth:`load` has run, so an empty store created
    before the saved cart is read can't overwrite it. Listeners registered
    with :meth:`subscribe` receive a snapshot of the items after each change.
    """

    def __init__(self, storage: Storage) -> None:
        self.storage = storage
        self._items: list[CartItem] = []
        self._listeners: list[Listener] = []
        self.loaded = False
        self.is_open = False

    @property
    def items(self) -> list[CartItem]:
        return list(self._items)

    @property
    def currency(self) -> str:
        return self._items[0].currency.lower() if self._items else DEFAULT_CURRENCY

    def load(self) -> list[CartItem]:
        """Read the saved cart. Unreadable data leaves the cart empty.

        Errors raised by the storage backend propagate and leave the store
        unloaded, so later changes don't overwrite the saved cart.
        """
        raw = self.storage.get_item(CART_STORAGE_KEY)
        try:
            if raw:
                self._items = list(CART_ITEMS.validate_json(raw))
        except ValidationError as e:
            logger.error(f"Error loading cart from storage: {e}")
            self._items = []
        self.loaded = True
        return self.items

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, items: list[CartItem]) -> None:
        self._items = items
        if self.loaded:
            payload = CART_ITEMS.dump_python(items, mode="json", by_alias=True)
            self.storage.set_item(CART_STORAGE_KEY, json.dumps(payload))
        snapshot = self.items
        for listener in list(self._listeners):
            listener(snapshot)

    def add_item(self, item: CartItem, quantity: Optional[int] = None) -> None:
        """Add ``item``, merging with an existing line of the same product and size.

        Raises:
            CurrencyMismatchError: The cart already holds items in another currency
        """
        if self._items and item.currency.lower() != self.currency:
            raise CurrencyMismatchError(self.currency, item.currency)

        added = quantity if quantity is not None else item.quantity
        if added <= 0:
            raise ValueError("Quantity must be positive")
        items = self.items
        for index, existing in enumerate(items):
            if existing.key == item.key:
                items[index] = existing.model_copy(
                    update={"quantity": existing.quantity + added}
                )
                break
        else:
            items.append(item.model_copy(update={"quantity": added}))
        self._commit(items)

    def remove_item(self, product_id: str, size: Optional[str] = None) -> None:
        key = cart_key(product_id, size)
        self._commit([item for item in self._items if item.key != key])

    def update_quantity(
        self, product_id: str, quantity: int, size: Optional[str] = None
    ) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(product_id, size)
            return
        key = cart_key(product_id, size)
        self._commit(
            [
                item.model_copy(update={"quantity": quantity}) if item.key == key else item
                for item in self._items
            ]
        )

    def clear_cart(self) -> None:
        self._commit([])

    def get_total_items(self) -> int:
        return sum(item.quantity for item in self._items)

    def get_total_price(self) -> Decimal:
        return sum((item.price * item.quantity for item in self._items), Decimal(0))

    def get_formatted_total(self, locale: Optional[str] = None) -> str:
        return format_price(self.get_total_price(), self.currency, locale or "en-us")

    def open_cart(self) -> None:
        self.is_open = True

    def close_cart(self) -> None:
        self.is_open = False
