"""Test utilities and helper functions.

Usage:
    from tests.utils import ShopifyStub, make_products, signed_query

    stub = ShopifyStub(make_products(23))
    client = ShopifyAdminClient(transport=httpx.MockTransport(stub))
    response = await http.get(f"/app?{signed_query()}")
"""

from __future__ import annotations

import json
import time
from typing import Any
from urllib.parse import urlencode

import httpx

from catalog_service.infra.auth import compute_signature

TEST_SHOP = "demo.myshopify.com"
TEST_SECRET = "test-api-secret"
TEST_ACCESS_TOKEN = "shpat_test_token"


def make_products(count: int) -> list[dict[str, Any]]:
    """Build Admin API product nodes ``gid://shopify/Product/1..count``."""
    return [
        {
            "id": f"gid://shopify/Product/{n}",
            "title": f"Product {n}",
            "onlineStoreUrl": f"https://demo.example/products/product-{n}",
        }
        for n in range(1, count + 1)
    ]


class ShopifyStub:
    """MockTransport handler that pages through an in-memory catalog.

    Cursors are ``c<index>``. ``first/after`` and ``last/before`` follow the
    Admin API connection semantics; responses carry ``pageInfo`` plus the
    ``edges`` (cursors only) or ``nodes`` the document selects. Set
    ``response`` to short-circuit with a fixed ``httpx.Response``.
    """

    def __init__(self, products: list[dict[str, Any]]) -> None:
        self.products = products
        self.requests: list[httpx.Request] = []
        self.response: httpx.Response | None = None

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.response is not None:
            return self.response

        body = json.loads(request.content)
        query = body["query"]
        variables = body.get("variables") or {}
        cursor = variables.get("cursor")
        size = variables["pageSize"]

        if "before: $cursor" in query:
            end = self._index(cursor) if cursor else len(self.products)
            start = max(0, end - size)
        else:
            start = self._index(cursor) + 1 if cursor else 0
            end = min(len(self.products), start + size)

        connection: dict[str, Any] = {
            "pageInfo": {
                "hasNextPage": end < len(self.products),
                "hasPreviousPage": start > 0,
                "startCursor": f"c{start}" if end > start else None,
                "endCursor": f"c{end - 1}" if end > start else None,
            }
        }
        if "edges" in query:
            connection["edges"] = [{"cursor": f"c{i}"} for i in range(start, end)]
        if "nodes" in query:
            connection["nodes"] = self.products[start:end]
        return httpx.Response(200, json={"data": {"products": connection}})

    @staticmethod
    def _index(cursor: str) -> int:
        return int(cursor.removeprefix("c"))


def signed_query(
    shop: str = TEST_SHOP,
    *,
    secret: str = TEST_SECRET,
    timestamp: int | None = None,
    **extra: str,
) -> str:
    """Build a query string signed the way Shopify signs admin page loads."""
    params = {
        "shop": shop,
        "timestamp": str(int(time.time()) if timestamp is None else timestamp),
        **extra,
    }
    params["hmac"] = compute_signature(list(params.items()), secret)
    return urlencode(params)
