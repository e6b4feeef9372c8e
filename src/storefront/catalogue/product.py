"""Product aggregate: the catalogue entry referenced by carts and orders."""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, String, Text

from storefront.catalogue.events import ProductAdded
from storefront.domain import storefront
from storefront.utils.query import fetch_all


def searchable_text(*values) -> str:
    return "\n".join(value.strip().lower() for value in values if value)


@storefront.aggregate
class Product:
    """A sellable item. The cart core only checks that it exists."""

    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    category = String(max_length=100)
    image_url = String(max_length=1024)
    created_at = DateTime()
    # Lower-cased name, description and category, matched by search on the store
    search_text = Text()

    @classmethod
    def add(cls, name, price, description=None, category=None, image_url=None):
        product = cls(
            name=name,
            description=description,
            price=price,
            category=category,
            image_url=image_url,
            created_at=datetime.now(UTC),
            search_text=searchable_text(name, description, category),
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                category=category,
                price=price,
            )
        )
        return product

    def to_dict(self):
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "category": self.category,
            "image_url": self.image_url,
        }


@storefront.repository(part_of=Product)
class ProductRepository:
    """Catalogue queries beyond lookup by identifier."""

    def list_all(self, limit: int | None = None, offset: int = 0) -> list[Product]:
        """Products ordered by name. Without ``limit`` the whole catalogue is returned."""
        query = self._dao.query.order_by("name")
        if limit is None:
            return fetch_all(query, start=offset)
        return query.limit(limit).offset(offset).all().items

    def search(self, text: str) -> list[Product]:
        """Case-insensitive substring match on name, description or category."""
        needle = (text or "").strip().lower()
        if not needle:
            return self.list_all()
        return fetch_all(self._dao.query.filter(search_text__contains=needle).order_by("name"))
