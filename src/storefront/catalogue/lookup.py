"""Catalogue lookup: read-only product queries used by the API and the cart core."""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


def normalize_product_id(product_id) -> str:
    return str(product_id).strip()


def get_product(product_id) -> Product:
    """Return the product or raise ``ObjectNotFoundError``."""
    return current_domain.repository_for(Product).get(normalize_product_id(product_id))


def require_products(product_ids) -> dict[str, Product]:
    """Resolve every identifier, failing on the first one that does not exist."""
    return {normalize_product_id(pid): get_product(pid) for pid in product_ids}


def find_product(product_id) -> Product | None:
    """Like ``get_product`` but returns None for identifiers that no longer resolve."""
    results = (
        current_domain.repository_for(Product)._dao.query.filter(id=normalize_product_id(product_id)).all().items
    )
    return results[0] if results else None


def all_products(limit: int | None = None, offset: int = 0) -> list[Product]:
    return current_domain.repository_for(Product).list_all(limit=limit, offset=offset)


def search_products(text: str) -> list[Product]:
    return current_domain.repository_for(Product).search(text)
