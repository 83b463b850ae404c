"""
Unit Tests for the Product Model

Tests aliases, completeness and search matching.
"""

import pytest

from product_catalog.models.product import Product, new_product_id


@pytest.mark.unit
class TestProduct:
    """Test suite for Product."""

    def test_new_product_id_format(self):
        product_id = new_product_id()

        assert product_id.startswith("product:")
        assert len(product_id) == len("product:") + 36

    def test_from_record_reads_aliases(self):
        product = Product.from_record({"_id": "product:1", "_rev": "2-abc", "brand": "Acme", "extra": 1})

        assert product.id == "product:1"
        assert product.rev == "2-abc"
        assert product.price_usd == 0

    def test_to_record_uses_aliases_and_drops_unset_ids(self):
        assert Product(brand="Acme", product_name="Anvil").to_record() == {
            "brand": "Acme",
            "product_name": "Anvil",
            "price_usd": 0,
            "rating": 0,
        }

    @pytest.mark.parametrize(
        "brand, name, complete",
        [("Acme", "Anvil", True), ("  ", "Anvil", False), ("Acme", None, False), (None, None, False)],
    )
    def test_is_complete(self, brand, name, complete):
        assert Product(brand=brand, product_name=name).is_complete is complete

    def test_internal_documents(self):
        assert Product(id="_design/views").is_internal
        assert not Product(id="product:1").is_internal

    def test_matches_is_case_insensitive_over_three_fields(self):
        product = Product(brand="Glossier", product_name="Boy Brow", category="Makeup")

        assert product.matches("gloss")
        assert product.matches("brow")
        assert product.matches("makeup")
        assert not product.matches("lipstick")
