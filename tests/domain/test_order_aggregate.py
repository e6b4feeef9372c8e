"""Tests for Order placement."""

import json

import pytest
from protean.exceptions import ValidationError
from storefront.ordering.events import OrderPlaced
from storefront.ordering.order import Order


class TestPlaceOrder:
    def test_copies_items(self):
        order = Order.place(
            user_id="user-1",
            items_data=[{"product_id": "prod-1", "quantity": 2}, {"product_id": "prod-2", "quantity": 1}],
        )
        assert order.user_id == "user-1"
        assert [item.to_dict() for item in order.items] == [
            {"product_id": "prod-1", "quantity": 2},
            {"product_id": "prod-2", "quantity": 1},
        ]
        assert order.created_at is not None

    def test_snapshot_is_independent_of_the_payload(self):
        payload = [{"product_id": "prod-1", "quantity": 2}]
        order = Order.place(user_id="user-1", items_data=payload)

        payload[0]["quantity"] = 9
        payload.append({"product_id": "prod-2", "quantity": 1})

        assert order.to_dict()["items"] == [{"product_id": "prod-1", "quantity": 2}]

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(user_id="user-1", items_data=[])
        assert "items" in str(exc.value)

    @pytest.mark.parametrize(
        "item",
        [
            {"quantity": 1},
            {"product_id": "", "quantity": 1},
            "prod-1",
        ],
    )
    def test_malformed_item_rejected(self, item):
        with pytest.raises(ValidationError):
            Order.place(user_id="user-1", items_data=[item])

    @pytest.mark.parametrize("quantity", [0, -1, None, "3"])
    def test_bad_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError):
            Order.place(user_id="user-1", items_data=[{"product_id": "prod-1", "quantity": quantity}])

    def test_raises_order_placed(self):
        order = Order.place(user_id="user-1", items_data=[{"product_id": "prod-1", "quantity": 3}])

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == order.id
        assert event.item_count == 1
        assert json.loads(event.items) == [{"product_id": "prod-1", "quantity": 3}]

    def test_to_dict(self):
        order = Order.place(user_id="user-1", items_data=[{"product_id": " prod-1 ", "quantity": 1}])
        data = order.to_dict()
        assert data["id"] == str(order.id)
        assert data["user_id"] == "user-1"
        assert data["items"] == [{"product_id": "prod-1", "quantity": 1}]
        assert data["created_at"] == order.created_at.isoformat()
