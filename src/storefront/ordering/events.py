"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order was created from a snapshot of cart-like lines."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    item_count = Integer(required=True)
    created_at = DateTime(required=True)
