"""Cart mutations: commands and handler.

Each command is a single read-modify-write of one user aggregate. Product
references are checked against the catalogue before anything changes, so a
failed command never leaves a partially applied cart behind.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import get_product
from storefront.domain import storefront
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class UpdateCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="User")
class MinusFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class RemoveCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class ClearUserCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        get_product(command.product_id)

        line = user.add_to_cart(command.product_id)
        repo.add(user)
        logger.info(
            "Added to cart",
            user_id=str(user.id),
            product_id=str(line.product_id),
            quantity=line.quantity,
        )

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        get_product(command.product_id)

        line = user.set_cart_quantity(command.product_id, command.quantity)
        repo.add(user)
        logger.info(
            "Cart quantity set",
            user_id=str(user.id),
            product_id=str(line.product_id),
            quantity=line.quantity,
        )

    @handle(MinusFromCart)
    def minus_from_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        line = user.decrement_cart_item(command.product_id)
        repo.add(user)
        logger.info(
            "Cart quantity decremented",
            user_id=str(user.id),
            product_id=str(line.product_id),
            quantity=line.quantity,
        )

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if not user.remove_cart_item(command.product_id):
            logger.debug("Cart line already absent", user_id=str(user.id), product_id=str(command.product_id))
            return

        repo.add(user)
        logger.info("Removed from cart", user_id=str(user.id), product_id=str(command.product_id))

    @handle(ClearUserCart)
    def clear_user_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        removed = user.clear_cart()
        repo.add(user)
        logger.info("Cart cleared", user_id=str(user.id), items_removed=removed)
