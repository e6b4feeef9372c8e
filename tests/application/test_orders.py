"""Application tests for order placement and order history."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.ordering.order import Order
from storefront.ordering.placement import AddOrder
from storefront.ordering.queries import get_order, get_user_orders
from storefront.user.cart import AddToCart, ClearUserCart
from storefront.user.user import User


def _place(user_id, items):
    return current_domain.process(AddOrder(user_id=user_id, items=json.dumps(items)), asynchronous=False)


class TestAddOrder:
    def test_happy_path(self, user_id, product_id):
        order_id = _place(user_id, [{"product_id": product_id, "quantity": 2}])

        order = current_domain.repository_for(Order).get(order_id)
        assert str(order.user_id) == user_id
        assert [item.to_dict() for item in order.items] == [{"product_id": product_id, "quantity": 2}]

    def test_unknown_user(self, product_id):
        with pytest.raises(ObjectNotFoundError):
            _place("no-such-user", [{"product_id": product_id, "quantity": 1}])

    def test_unknown_product(self, user_id):
        with pytest.raises(ObjectNotFoundError):
            _place(user_id, [{"product_id": "no-such-product", "quantity": 1}])
        assert get_user_orders(user_id) == []

    def test_empty_items_rejected(self, user_id):
        with pytest.raises(ValidationError):
            _place(user_id, [])

    def test_items_must_be_json_list(self, user_id):
        with pytest.raises(ValidationError):
            current_domain.process(AddOrder(user_id=user_id, items="{not json"), asynchronous=False)

        with pytest.raises(ValidationError):
            current_domain.process(AddOrder(user_id=user_id, items='{"product_id": "x"}'), asynchronous=False)

    def test_does_not_touch_the_cart(self, user_id, product_id):
        current_domain.process(AddToCart(user_id=user_id, product_id=product_id), asynchronous=False)
        _place(user_id, [{"product_id": product_id, "quantity": 1}])

        user = current_domain.repository_for(User).get(user_id)
        assert user.cart_snapshot() == [{"product_id": product_id, "quantity": 1}]

    def test_order_survives_later_cart_changes(self, user_id, product_id):
        current_domain.process(AddToCart(user_id=user_id, product_id=product_id), asynchronous=False)
        user = current_domain.repository_for(User).get(user_id)
        order_id = _place(user_id, user.cart_snapshot())

        current_domain.process(AddToCart(user_id=user_id, product_id=product_id), asynchronous=False)
        current_domain.process(ClearUserCart(user_id=user_id), asynchronous=False)

        assert get_order(order_id)["items"] == [{"product_id": product_id, "quantity": 1}]


class TestOrderHistory:
    def test_newest_first(self, user_id, product_id):
        first = _place(user_id, [{"product_id": product_id, "quantity": 1}])
        second = _place(user_id, [{"product_id": product_id, "quantity": 2}])

        orders = get_user_orders(user_id)
        assert [order["id"] for order in orders] == [second, first]

    def test_only_own_orders(self, user_id, product_id):
        from storefront.user.registration import RegisterUser

        other_id = current_domain.process(RegisterUser(email="other@example.com"), asynchronous=False)
        _place(other_id, [{"product_id": product_id, "quantity": 1}])

        assert get_user_orders(user_id) == []
        assert len(get_user_orders(other_id)) == 1

    def test_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            get_user_orders("no-such-user")

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            get_order("no-such-order")
