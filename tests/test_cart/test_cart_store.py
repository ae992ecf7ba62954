"""Tests for the cart store."""

import json
from decimal import Decimal

import pytest
import redis

from storefront.cart.models import CartItem
from storefront.cart.storage import MemoryStorage
from storefront.cart.store import CART_STORAGE_KEY, CartStore, CurrencyMismatchError


def make_item(
    product_id: str = "prod_tee",
    price: str = "299",
    currency: str = "sek",
    quantity: int = 1,
    size: str | None = None,
) -> CartItem:
    return CartItem(
        id=product_id,
        name=f"Product {product_id}",
        price=Decimal(price),
        currency=currency,
        price_id=f"price_{product_id}",
        quantity=quantity,
        size=size,
    )


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage) -> CartStore:
    cart = CartStore(storage)
    cart.load()
    return cart


def saved_items(storage: MemoryStorage) -> list[dict]:
    return json.loads(storage.get_item(CART_STORAGE_KEY) or "[]")


def test_adding_same_line_merges_quantities(store: CartStore) -> None:
    store.add_item(make_item(quantity=2))
    store.add_item(make_item(quantity=3))

    assert len(store.items) == 1
    assert store.items[0].quantity == 5
    assert store.get_total_items() == 5


def test_sizes_are_separate_lines(store: CartStore) -> None:
    store.add_item(make_item(size="M"))
    store.add_item(make_item(size="L"))
    store.add_item(make_item(size="M"))

    assert [(item.size, item.quantity) for item in store.items] == [("M", 2), ("L", 1)]


def test_explicit_quantity_overrides_item_quantity(store: CartStore) -> None:
    store.add_item(make_item(quantity=5), quantity=2)
    assert store.items[0].quantity == 2


def test_non_positive_quantity_is_rejected(store: CartStore) -> None:
    with pytest.raises(ValueError):
        store.add_item(make_item(), quantity=0)
    assert store.items == []


def test_remove_item_only_removes_matching_size(store: CartStore) -> None:
    store.add_item(make_item(size="M"))
    store.add_item(make_item(size="L"))

    store.remove_item("prod_tee", "M")

    assert [item.size for item in store.items] == ["L"]


def test_update_quantity(store: CartStore) -> None:
    store.add_item(make_item())
    store.update_quantity("prod_tee", 4)
    assert store.items[0].quantity == 4

    store.update_quantity("prod_tee", 0)
    assert store.items == []


def test_totals(store: CartStore) -> None:
    store.add_item(make_item("prod_tee", price="299", quantity=2))
    store.add_item(make_item("prod_cap", price="149.50"))

    assert store.get_total_items() == 3
    assert store.get_total_price() == Decimal("747.50")


def test_empty_cart_defaults(store: CartStore) -> None:
    assert store.currency == "usd"
    assert store.get_total_price() == Decimal(0)
    assert store.get_formatted_total("en-us") == "$0"


def test_formatted_total_uses_cart_currency(store: CartStore) -> None:
    store.add_item(make_item(price="199", currency="usd"))
    assert store.get_formatted_total() == "$199"


def test_mixed_currencies_are_rejected(store: CartStore) -> None:
    store.add_item(make_item(currency="sek"))

    with pytest.raises(CurrencyMismatchError) as exc_info:
        store.add_item(make_item("prod_mug", currency="USD"))

    assert exc_info.value.cart_currency == "sek"
    assert len(store.items) == 1


def test_changes_are_persisted(store: CartStore, storage: MemoryStorage) -> None:
    store.add_item(make_item(size="M"))

    saved = saved_items(storage)
    assert saved[0]["id"] == "prod_tee"
    assert saved[0]["priceId"] == "price_prod_tee"
    assert saved[0]["size"] == "M"

    store.clear_cart()
    assert saved_items(storage) == []


def test_nothing_is_written_before_load(storage: MemoryStorage) -> None:
    storage.set_item(CART_STORAGE_KEY, json.dumps([make_item().model_dump(mode="json", by_alias=True)]))
    cart = CartStore(storage)

    cart.add_item(make_item("prod_mug"))

    assert [item["id"] for item in saved_items(storage)] == ["prod_tee"]


def test_load_restores_saved_cart(store: CartStore, storage: MemoryStorage) -> None:
    store.add_item(make_item(quantity=2, size="S"))

    restored = CartStore(storage)
    items = restored.load()

    assert restored.loaded
    assert items == store.items
    assert items[0].price == Decimal("299")


def test_corrupt_saved_cart_loads_empty(storage: MemoryStorage) -> None:
    storage.set_item(CART_STORAGE_KEY, '[{"id": "prod_tee"}]')
    cart = CartStore(storage)

    assert cart.load() == []
    assert cart.loaded

    storage.set_item(CART_STORAGE_KEY, "not json")
    assert CartStore(storage).load() == []


def test_storage_failure_leaves_cart_unloaded(storage: MemoryStorage, mocker) -> None:
    storage.set_item(CART_STORAGE_KEY, json.dumps([make_item().model_dump(mode="json", by_alias=True)]))
    saved = storage.get_item(CART_STORAGE_KEY)
    cart = CartStore(storage)
    mocker.patch.object(storage, "get_item", side_effect=redis.ConnectionError("down"))

    with pytest.raises(redis.ConnectionError):
        cart.load()

    assert not cart.loaded
    cart.add_item(make_item("prod_mug"))
    assert storage._data[CART_STORAGE_KEY] == saved


def test_listeners_receive_snapshots(store: CartStore) -> None:
    seen: list[int] = []
    unsubscribe = store.subscribe(lambda items: seen.append(len(items)))

    store.add_item(make_item())
    store.add_item(make_item("prod_cap"))
    unsubscribe()
    store.clear_cart()

    assert seen == [1, 2]
    unsubscribe()


def test_open_and_close(store: CartStore) -> None:
    assert not store.is_open
    store.open_cart()
    assert store.is_open
    store.close_cart()
    assert not store.is_open
