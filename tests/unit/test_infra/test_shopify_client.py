"""Unit tests for ShopifyAdminClient using httpx.MockTransport."""
from __future__ import annotations

import json

import httpx
import pytest

from catalog_service.infra.shopify import (
    AdminApi,
    ShopifyAdminClient,
    ShopifyAPIError,
    ShopifyThrottledError,
)
from catalog_service.infra.shopify.client import operation_name

SHOP = "demo.myshopify.com"


def _client(handler) -> ShopifyAdminClient:
    return ShopifyAdminClient(api_version="2024-10", transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestShopifyAdminClient:
    async def test_posts_query_and_returns_data(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"shop": {"name": "Demo"}}})

        async with _client(handler) as client:
            data = await client.graphql(SHOP, "shpat_1", "{ shop { name } }", {"a": 1})

        assert data == {"shop": {"name": "Demo"}}
        (request,) = seen
        assert request.method == "POST"
        assert str(request.url) == "https://demo.myshopify.com/admin/api/2024-10/graphql.json"
        assert request.headers["X-Shopify-Access-Token"] == "shpat_1"
        assert json.loads(request.content) == {"query": "{ shop { name } }", "variables": {"a": 1}}

    async def test_variables_are_optional(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert "variables" not in json.loads(request.content)
            return httpx.Response(200, json={"data": {}})

        async with _client(handler) as client:
            assert await client.graphql(SHOP, "t", "{ shop { id } }") == {}

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(ShopifyAPIError, match="Could not reach") as exc_info:
                await client.graphql(SHOP, "t", "{ shop { id } }")

        assert exc_info.value.extra == {"shop": SHOP, "error_type": "ConnectError"}

    @pytest.mark.parametrize("status_code", [401, 404, 500, 503])
    async def test_http_error_status(self, status_code: int):
        async with _client(lambda r: httpx.Response(status_code, text="nope")) as client:
            with pytest.raises(ShopifyAPIError) as exc_info:
                await client.graphql(SHOP, "t", "{ shop { id } }")

        assert exc_info.value.status_code == 502
        assert exc_info.value.extra["status_code"] == status_code

    async def test_http_429_is_throttled(self):
        async with _client(lambda r: httpx.Response(429)) as client:
            with pytest.raises(ShopifyThrottledError):
                await client.graphql(SHOP, "t", "{ shop { id } }")

    async def test_graphql_errors(self):
        body = {"errors": [{"message": "first"}, {"message": "second"}], "data": None}

        async with _client(lambda r: httpx.Response(200, json=body)) as client:
            with pytest.raises(ShopifyAPIError, match="first; second") as exc_info:
                await client.graphql(SHOP, "t", "{ products { nodes { id } } }")

        assert exc_info.value.type == "shopify-api-error"
        assert exc_info.value.extra["errors"] == ["first", "second"]

    async def test_throttled_graphql_error(self):
        body = {"errors": [{"message": "Throttled", "extensions": {"code": "THROTTLED"}}]}

        async with _client(lambda r: httpx.Response(200, json=body)) as client:
            with pytest.raises(ShopifyThrottledError) as exc_info:
                await client.graphql(SHOP, "t", "{ shop { id } }")

        assert exc_info.value.type == "shopify-throttled"

    async def test_string_errors_payload(self):
        body = {"errors": "[API] Invalid API key or access token"}

        async with _client(lambda r: httpx.Response(200, json=body)) as client:
            with pytest.raises(ShopifyAPIError, match="Invalid API key"):
                await client.graphql(SHOP, "t", "{ shop { id } }")

    async def test_invalid_json(self):
        async with _client(lambda r: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ShopifyAPIError, match="invalid JSON"):
                await client.graphql(SHOP, "t", "{ shop { id } }")

    @pytest.mark.parametrize("body", [[], {"data": None}, {"data": []}])
    async def test_missing_data(self, body):
        async with _client(lambda r: httpx.Response(200, json=body)) as client:
            with pytest.raises(ShopifyAPIError):
                await client.graphql(SHOP, "t", "{ shop { id } }")


@pytest.mark.unit
class TestAdminApi:
    async def test_graphql_runs_as_bound_shop(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"ok": True}})

        async with _client(handler) as client:
            admin = AdminApi(shop=SHOP, access_token="shpat_secret", client=client)
            assert await admin.graphql("{ ok }") == {"ok": True}

        assert seen[0].url.host == SHOP
        assert seen[0].headers["X-Shopify-Access-Token"] == "shpat_secret"

    async def test_repr_hides_access_token(self):
        async with _client(lambda r: httpx.Response(200, json={"data": {}})) as client:
            admin = AdminApi(shop=SHOP, access_token="shpat_secret", client=client)

            assert "shpat_secret" not in repr(admin)
            assert SHOP in repr(admin)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("\nquery GetProducts($cursor: String) { products { nodes { id } } }", "GetProducts"),
        ("mutation UpdateTitle { productUpdate { product { id } } }", "UpdateTitle"),
        ("{ shop { name } }", None),
    ],
)
def test_operation_name(query: str, expected: str | None):
    assert operation_name(query) == expected
