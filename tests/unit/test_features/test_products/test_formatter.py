"""Unit tests for the pseudo-CSV product formatter."""
from __future__ import annotations

import pytest

from catalog_service.features.products.formatter import (
    format_product,
    format_products,
    product_numeric_id,
)
from catalog_service.features.products.schemas import Product


@pytest.mark.unit
class TestProductNumericId:
    def test_strips_product_gid_prefix(self):
        assert product_numeric_id("gid://shopify/Product/8123") == "8123"

    def test_ids_without_prefix_pass_through(self):
        assert product_numeric_id("8123") == "8123"
        assert product_numeric_id("gid://shopify/Variant/5") == "gid://shopify/Variant/5"

    def test_strips_prefix_only_once(self):
        """Only the leading literal prefix is removed."""
        assert (
            product_numeric_id("gid://shopify/Product/gid://shopify/Product/1")
            == "gid://shopify/Product/1"
        )


@pytest.mark.unit
class TestFormatProducts:
    def test_empty_list_is_empty_string(self):
        assert format_products([]) == ""

    def test_record_layout(self):
        product = Product(id="gid://shopify/Product/7", title="Mug", online_store_url="https://x/mug")

        assert format_product(product) == (
            "  {\n"
            "    id: 7,\n"
            "    url: https://x/mug,\n"
            "    title: Mug\n"
            "  },"
        )

    def test_missing_url_and_title_render_empty(self):
        product = Product(id="gid://shopify/Product/9")

        assert "    url: ,\n" in format_product(product)
        assert "    title: \n" in format_product(product)

    def test_removes_every_double_quote_from_title(self):
        product = Product(id="1", title='"Big" "Red" Mug"')

        assert '"' not in format_product(product)
        assert "title: Big Red Mug\n" in format_product(product)

    def test_preserves_order_with_one_block_per_product(self):
        products = [Product(id=f"gid://shopify/Product/{n}", title=f"P{n}") for n in (3, 1, 2)]

        output = format_products(products)

        assert output.count("  {\n") == 3
        assert output.count("  },") == 3
        assert [line.strip() for line in output.splitlines() if "id:" in line] == [
            "id: 3,",
            "id: 1,",
            "id: 2,",
        ]

    def test_title_punctuation_is_not_escaped(self):
        product = Product(id="1", title="Tea, green & <loose>")

        assert "title: Tea, green & <loose>\n" in format_product(product)

    def test_two_product_catalog_output(self):
        products = [
            Product.model_validate(
                {"id": "gid://shopify/Product/1", "title": 'A"B', "onlineStoreUrl": "https://x/a"}
            ),
            Product.model_validate({"id": "gid://shopify/Product/2", "title": "C"}),
        ]

        assert format_products(products) == (
            "  {\n"
            "    id: 1,\n"
            "    url: https://x/a,\n"
            "    title: AB\n"
            "  },\n"
            "  {\n"
            "    id: 2,\n"
            "    url: ,\n"
            "    title: C\n"
            "  },"
        )
