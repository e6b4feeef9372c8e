"""Domain events for the User aggregate and its embedded cart."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new user account was created, by explicit signup or first sign-in."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    email = String(required=True)
    first_name = String()
    last_name = String()
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class CartItemAdded:
    """One more unit of a product was put in the cart."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)  # Line quantity after the addition


@storefront.event(part_of="User")
class CartItemQuantityChanged:
    """A cart line's quantity was set or decremented."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer()  # None when the line was created by the change
    new_quantity = Integer(required=True)


@storefront.event(part_of="User")
class CartItemRemoved:
    """A cart line was deleted."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="User")
class CartCleared:
    """Every line was removed from the cart."""

    __version__ = "v1"

    user_id = Identifier(required=True)
    items_removed_count = Integer(required=True)
