"""Order aggregate: an immutable snapshot of what a user bought.

Items are copied out of the caller's payload when the order is placed. An
order never references the live cart, so later cart changes cannot reach it.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.catalogue.lookup import normalize_product_id
from storefront.domain import storefront
from storefront.ordering.events import OrderPlaced
from storefront.user.user import validate_quantity
from storefront.utils.query import fetch_all


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)

    def to_dict(self):
        return {"product_id": str(self.product_id), "quantity": self.quantity}


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    created_at = DateTime(required=True)

    @classmethod
    def place(cls, user_id, items_data):
        """Create an order from ``[{"product_id": ..., "quantity": ...}, ...]``."""
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        snapshot = []
        for item in items_data:
            if not isinstance(item, dict) or not item.get("product_id"):
                raise ValidationError({"items": [f"Malformed order item: {item!r}"]})
            snapshot.append(
                {
                    "product_id": normalize_product_id(item["product_id"]),
                    "quantity": validate_quantity(item.get("quantity")),
                }
            )

        now = datetime.now(UTC)
        order = cls(user_id=str(user_id), created_at=now)
        for line in snapshot:
            order.add_items(OrderItem(**line))

        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=str(user_id),
                items=json.dumps(snapshot),
                item_count=len(snapshot),
                created_at=now,
            )
        )
        return order

    def to_dict(self):
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "items": [item.to_dict() for item in self.items],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_user(self, user_id) -> list[Order]:
        """All orders of a user, newest first."""
        orders = fetch_all(self._dao.query.filter(user_id=str(user_id)))
        return sorted(orders, key=lambda order: order.created_at, reverse=True)
