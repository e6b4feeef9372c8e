"""Catalogue maintenance: command and handler for listing a product."""

import structlog
from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    image_url = String(max_length=1024)


@storefront.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            price=command.price,
            description=command.description,
            category=command.category,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product added", product_id=str(product.id), name=product.name)
        return str(product.id)
