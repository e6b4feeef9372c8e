"""Application tests for catalogue listing and lookup."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.listing import AddProduct
from storefront.catalogue.lookup import all_products, find_product, get_product, require_products, search_products


def _add(name, price=10.0, **kwargs):
    return current_domain.process(AddProduct(name=name, price=price, **kwargs), asynchronous=False)


class TestAddProduct:
    def test_happy_path(self):
        product_id = _add("Trail Runner", 89.99, category="Shoes")
        product = get_product(product_id)
        assert product.name == "Trail Runner"
        assert product.price == 89.99
        assert product.category == "Shoes"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            AddProduct(name="Broken", price=-1.0)


class TestLookup:
    def test_get_product_trims_identifier(self):
        product_id = _add("Mug")
        assert str(get_product(f" {product_id} ").id) == product_id

    def test_get_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            get_product("no-such-product")

    def test_find_unknown_product(self):
        assert find_product("no-such-product") is None

    def test_require_products_fails_on_any_missing(self):
        product_id = _add("Mug")
        assert set(require_products([product_id])) == {product_id}
        with pytest.raises(ObjectNotFoundError):
            require_products([product_id, "no-such-product"])

    def test_all_products_sorted_by_name(self):
        _add("Zipper Hoodie")
        _add("Alpine Tent")
        assert [p.name for p in all_products()] == ["Alpine Tent", "Zipper Hoodie"]


class TestSearch:
    def test_matches_name_description_and_category(self):
        _add("Trail Runner", category="Shoes")
        _add("Rain Jacket", description="Keeps the trail rain out", category="Outerwear")
        _add("Coffee Mug", category="Kitchen")

        assert {p.name for p in search_products("TRAIL")} == {"Trail Runner", "Rain Jacket"}
        assert [p.name for p in search_products("kitchen")] == ["Coffee Mug"]

    def test_no_match(self):
        _add("Coffee Mug")
        assert search_products("bicycle") == []


class TestWholeCatalogue:
    @pytest.fixture()
    def small_batches(self, monkeypatch):
        from storefront.utils import query

        monkeypatch.setattr(query, "BATCH_SIZE", 2)

    def test_listing_reads_past_one_batch(self, small_batches):
        for name in ["Aaa", "Bbb", "Ccc", "Ddd", "Zebra Lamp"]:
            _add(name)

        assert [p.name for p in all_products()] == ["Aaa", "Bbb", "Ccc", "Ddd", "Zebra Lamp"]

    def test_search_finds_products_sorted_last(self, small_batches):
        for name in ["Aaa", "Bbb", "Ccc", "Zebra Lamp"]:
            _add(name)

        assert [p.name for p in search_products("zebra")] == ["Zebra Lamp"]

    def test_search_matches_across_many_batches(self, small_batches):
        for index in range(7):
            _add(f"Lamp {index}")
        _add("Chair")

        assert len(search_products("LAMP")) == 7

    def test_listing_beyond_a_default_page(self):
        for index in range(120):
            _add(f"Item {index:03d}")

        products = all_products()
        assert len(products) == 120
        assert products[-1].name == "Item 119"

    def test_explicit_paging(self):
        for name in ["Aaa", "Bbb", "Ccc", "Ddd"]:
            _add(name)

        assert [p.name for p in all_products(limit=2, offset=1)] == ["Bbb", "Ccc"]

    def test_search_ignores_products_without_description(self):
        _add("Coffee Mug")
        _add("Tea Pot", description="Brews a mug or two", category="Kitchen")

        assert {p.name for p in search_products("mug")} == {"Coffee Mug", "Tea Pot"}
