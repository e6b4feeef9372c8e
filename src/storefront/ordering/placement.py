"""Order placement: command and handler.

Placing an order does not touch the cart. A checkout is two steps at the
caller: ``AddOrder`` with the cart's lines, then ``ClearUserCart``.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import require_products
from storefront.domain import storefront
from storefront.ordering.order import Order
from storefront.user.user import User

logger = structlog.get_logger(__name__)


def _parse_items(items):
    if not isinstance(items, str):
        return items
    try:
        return json.loads(items)
    except json.JSONDecodeError:
        raise ValidationError({"items": ["Order items must be a JSON list"]}) from None


@storefront.command(part_of="Order")
class AddOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}


@storefront.command_handler(part_of=Order)
class AddOrderHandler:
    @handle(AddOrder)
    def add_order(self, command):
        user = current_domain.repository_for(User).get(command.user_id)

        items_data = _parse_items(command.items)
        if not isinstance(items_data, list):
            raise ValidationError({"items": ["Order items must be a list"]})

        order = Order.place(user_id=user.id, items_data=items_data)
        require_products(item.product_id for item in order.items)

        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(user.id),
            item_count=len(order.items),
        )
        return str(order.id)
