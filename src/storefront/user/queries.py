"""Read-side views of a user and their cart."""

from protean.utils.globals import current_domain

from storefront.catalogue.lookup import find_product
from storefront.user.user import User


def load_user(user_id) -> User:
    """Return the user or raise ``ObjectNotFoundError``."""
    return current_domain.repository_for(User).get(str(user_id).strip())


def user_view(user: User) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "cart": user.cart_snapshot(),
    }


def get_user(user_id) -> dict:
    return user_view(load_user(user_id))


def get_user_cart(user_id) -> list[dict]:
    """Cart lines joined with their catalogue entries.

    A line whose product has since left the catalogue is kept with
    ``product`` set to None, so the shopper can still remove it.
    """
    user = load_user(user_id)
    lines = []
    for item in user.cart_items:
        product = find_product(item.product_id)
        lines.append(
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "product": product.to_dict() if product else None,
            }
        )
    return lines
