"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was listed in the catalogue."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    category = String()
    price = Float(required=True)
