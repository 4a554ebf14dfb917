"""Pseudo-CSV rendering of a product list.

The output is meant for copy-paste, not machine parsing: values are not
quoted or escaped, only double quotes are removed from titles.
"""

from __future__ import annotations

from collections.abc import Iterable

from catalog_service.features.products.schemas import Product

PRODUCT_GID_PREFIX = "gid://shopify/Product/"


def product_numeric_id(product_id: str) -> str:
    """Strip the product gid prefix; other ids pass through unchanged."""
    return product_id.removeprefix(PRODUCT_GID_PREFIX)


def format_product(product: Product) -> str:
    """Render one product as a brace-delimited record."""
    product_id = product_numeric_id(product.id)
    url = product.online_store_url or ""
    title = (product.title or "").replace('"', "")
    return f"  {{\n    id: {product_id},\n    url: {url},\n    title: {title}\n  }},"


def format_products(products: Iterable[Product]) -> str:
    """Render products in input order, one record each, joined by newlines.

    Example:
        >>> format_products([Product(id="gid://shopify/Product/2", title="C")])
        '  {\\n    id: 2,\\n    url: ,\\n    title: C\\n  },'
    """
    return "\n".join(format_product(product) for product in products)
