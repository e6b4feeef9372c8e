"""User aggregate with its embedded cart.

The user document and its cart lines form one consistency boundary: every
cart mutation loads the user, applies a single transition and saves the whole
aggregate back.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.catalogue.lookup import normalize_product_id
from storefront.domain import storefront
from storefront.user.email import is_valid_email, normalize_email
from storefront.user.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    UserRegistered,
)


def validate_quantity(quantity):
    """Reject anything that is not a whole number of at least one unit."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": [f"Quantity must be a positive integer, got {quantity!r}"]})
    return quantity


@storefront.entity(part_of="User")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    def set_quantity(self, quantity):
        self.quantity = validate_quantity(quantity)

    def to_dict(self):
        return {"product_id": str(self.product_id), "quantity": self.quantity}


@storefront.aggregate
class User:
    """A shopper. Owns exactly one cart, stored inline as ``cart_items``."""

    email = String(required=True, max_length=254, unique=True)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    cart_items = HasMany(CartItem)
    registered_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not is_valid_email(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @invariant.post
    def one_cart_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.cart_items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"cart_items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, email, first_name=None, last_name=None):
        now = datetime.now(UTC)
        user = cls(
            email=normalize_email(email),
            first_name=first_name,
            last_name=last_name,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                first_name=first_name,
                last_name=last_name,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def cart_line(self, product_id):
        """Return the line for ``product_id`` or None. Matches on identifier only."""
        wanted = normalize_product_id(product_id)
        return next((item for item in self.cart_items if str(item.product_id) == wanted), None)

    def add_to_cart(self, product_id):
        """Put one more unit of the product in the cart."""
        line = self.cart_line(product_id)
        if line is not None:
            line.set_quantity(line.quantity + 1)
        else:
            line = CartItem(
                product_id=normalize_product_id(product_id),
                quantity=1,
                added_at=datetime.now(UTC),
            )
            self.add_cart_items(line)

        self.raise_(
            CartItemAdded(
                user_id=self.id,
                product_id=str(line.product_id),
                quantity=line.quantity,
            )
        )
        return line

    def set_cart_quantity(self, product_id, quantity):
        """Set a line's quantity outright, creating the line when it is missing."""
        validate_quantity(quantity)

        line = self.cart_line(product_id)
        previous_quantity = line.quantity if line is not None else None
        if line is not None:
            line.set_quantity(quantity)
        else:
            line = CartItem(
                product_id=normalize_product_id(product_id),
                quantity=quantity,
                added_at=datetime.now(UTC),
            )
            self.add_cart_items(line)

        self.raise_(
            CartItemQuantityChanged(
                user_id=self.id,
                product_id=str(line.product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return line

    def decrement_cart_item(self, product_id):
        """Take one unit off an existing line. Never drops a line to zero."""
        line = self.cart_line(product_id)
        if line is None:
            raise ObjectNotFoundError(f"Product {product_id} is not in the cart of user {self.id}")

        if line.quantity <= 1:
            raise InvalidOperationError(
                f"Cannot decrement product {product_id} below a quantity of 1; remove the line instead"
            )

        previous_quantity = line.quantity
        line.set_quantity(previous_quantity - 1)

        self.raise_(
            CartItemQuantityChanged(
                user_id=self.id,
                product_id=str(line.product_id),
                previous_quantity=previous_quantity,
                new_quantity=line.quantity,
            )
        )
        return line

    def remove_cart_item(self, product_id):
        """Delete the line if present. Returns whether anything was removed."""
        line = self.cart_line(product_id)
        if line is None:
            return False

        self.remove_cart_items(line)
        self.raise_(CartItemRemoved(user_id=self.id, product_id=str(line.product_id)))
        return True

    def clear_cart(self):
        removed = list(self.cart_items)
        for line in removed:
            self.remove_cart_items(line)

        self.raise_(CartCleared(user_id=self.id, items_removed_count=len(removed)))
        return len(removed)

    def cart_snapshot(self):
        """Plain ``(product_id, quantity)`` copies of the current lines."""
        return [item.to_dict() for item in self.cart_items]
