"""Tests for storefront domain events."""

from protean.utils import DomainObjects
from storefront.catalogue.events import ProductAdded
from storefront.ordering.events import OrderPlaced
from storefront.user.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    UserRegistered,
)

ALL_EVENTS = [
    ProductAdded,
    UserRegistered,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartCleared,
    OrderPlaced,
]


class TestEventDefinitions:
    def test_element_type(self):
        for event_cls in ALL_EVENTS:
            assert event_cls.element_type == DomainObjects.EVENT

    def test_version(self):
        for event_cls in ALL_EVENTS:
            assert event_cls.__version__ == "v1"


class TestCartItemQuantityChanged:
    def test_previous_quantity_is_optional(self):
        event = CartItemQuantityChanged(user_id="user-1", product_id="prod-1", new_quantity=3)
        assert event.previous_quantity is None
        assert event.new_quantity == 3


class TestCartCleared:
    def test_construction(self):
        event = CartCleared(user_id="user-1", items_removed_count=4)
        assert event.user_id == "user-1"
        assert event.items_removed_count == 4
