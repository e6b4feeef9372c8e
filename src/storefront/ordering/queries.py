"""Read-side views of orders."""

from protean.utils.globals import current_domain

from storefront.ordering.order import Order
from storefront.user.queries import load_user


def get_order(order_id) -> dict:
    return current_domain.repository_for(Order).get(str(order_id)).to_dict()


def get_user_orders(user_id) -> list[dict]:
    user = load_user(user_id)
    return [order.to_dict() for order in current_domain.repository_for(Order).find_by_user(user.id)]
