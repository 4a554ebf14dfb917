"""Shopify Admin GraphQL client.

One pooled ``httpx.AsyncClient`` is shared by the whole process; each call
names the shop and access token it runs as. Route code never touches this
class directly: it receives an :class:`AdminApi` bound to the authenticated
shop from the auth gate.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any

import httpx

from catalog_service.infra.shopify.exceptions import ShopifyAPIError, ShopifyThrottledError

logger = logging.getLogger(__name__)

_OPERATION_NAME_RE = re.compile(r"^\s*(?:query|mutation)\s+(\w+)")


def operation_name(query: str) -> str | None:
    """Name of a GraphQL operation, or None for anonymous documents."""
    match = _OPERATION_NAME_RE.match(query)
    return match.group(1) if match else None


class ShopifyAdminClient:
    """HTTP client for the Shopify Admin GraphQL API.

    No retry policy: a failed request surfaces as :class:`ShopifyAPIError`.

    Usage:
        async with ShopifyAdminClient(api_version="2024-10") as client:
            data = await client.graphql(
                shop="demo.myshopify.com",
                access_token="shpat_...",
                query="{ shop { name } }",
            )
    """

    def __init__(
        self,
        api_version: str = "2024-10",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_version: Admin API version (YYYY-MM).
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self.api_version = api_version
        self.timeout = timeout

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            limits=httpx.Limits(
                max_keepalive_connections=20,
                max_connections=100,
            ),
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        await self.client.aclose()

    async def __aenter__(self) -> ShopifyAdminClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def endpoint(self, shop: str) -> str:
        """Admin GraphQL endpoint for a shop."""
        return f"https://{shop}/admin/api/{self.api_version}/graphql.json"

    async def graphql(
        self,
        shop: str,
        access_token: str,
        query: str,
        variables: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL document and return its ``data`` object.

        Args:
            shop: Shop domain (``*.myshopify.com``).
            access_token: Admin API access token for the shop.
            query: GraphQL document.
            variables: Query variables.

        Returns:
            The response's ``data`` mapping.

        Raises:
            ShopifyThrottledError: The query was throttled.
            ShopifyAPIError: Transport failure, non-2xx status, GraphQL errors
                or a response without ``data``.
        """
        url = self.endpoint(shop)
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables

        started = time.perf_counter()
        try:
            response = await self.client.post(
                url,
                json=payload,
                headers={"X-Shopify-Access-Token": access_token},
            )
        except httpx.HTTPError as e:
            logger.error(
                "Shopify Admin API request failed",
                extra={"shop": shop, "error": str(e), "error_type": type(e).__name__},
            )
            raise ShopifyAPIError(
                "Could not reach the Shopify Admin API",
                shop=shop,
                extra={"error_type": type(e).__name__},
            ) from e

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "Shopify Admin API response",
            extra={
                "shop": shop,
                "operation": operation_name(query),
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        if response.status_code == 429:
            raise ShopifyThrottledError(shop=shop, extra={"status_code": 429})
        if response.is_error:
            raise ShopifyAPIError(
                f"Shopify Admin API returned HTTP {response.status_code}",
                shop=shop,
                extra={"status_code": response.status_code},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ShopifyAPIError("Shopify Admin API returned invalid JSON", shop=shop) from e

        if not isinstance(body, dict):
            raise ShopifyAPIError("Shopify Admin API returned an unexpected payload", shop=shop)

        errors = body.get("errors")
        if errors:
            self._raise_graphql_errors(shop, errors)

        data = body.get("data")
        if not isinstance(data, dict):
            raise ShopifyAPIError("Shopify Admin API response has no data", shop=shop)
        return data

    @staticmethod
    def _raise_graphql_errors(shop: str, errors: Any) -> None:
        if not isinstance(errors, list):
            # REST-style error payloads carry a plain string
            raise ShopifyAPIError(f"Shopify Admin API error: {errors}", shop=shop)

        messages = [
            e.get("message", str(e)) if isinstance(e, dict) else str(e) for e in errors
        ]
        logger.warning("GraphQL errors", extra={"shop": shop, "errors": messages})

        codes = {
            (e.get("extensions") or {}).get("code") for e in errors if isinstance(e, dict)
        }
        if "THROTTLED" in codes:
            raise ShopifyThrottledError(shop=shop, extra={"errors": messages})
        raise ShopifyAPIError(
            f"GraphQL errors: {'; '.join(messages)}",
            shop=shop,
            extra={"errors": messages},
        )


@dataclass(frozen=True)
class AdminApi:
    """Admin API capability bound to one authenticated shop.

    Produced by the auth gate and passed explicitly to services; holding
    one is proof the request was authenticated for ``shop``.
    """

    shop: str
    access_token: str
    client: ShopifyAdminClient

    async def graphql(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL document as this shop."""
        return await self.client.graphql(self.shop, self.access_token, query, variables)

    def __repr__(self) -> str:
        return f"AdminApi(shop={self.shop!r})"
