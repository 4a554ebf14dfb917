"""Shopify Admin API errors."""

from __future__ import annotations

from typing import Any

from catalog_service.core.exceptions import UpstreamServiceException


class ShopifyAPIError(UpstreamServiceException):
    """Raised when an Admin API call fails or returns an unusable payload.

    Example:
        raise ShopifyAPIError(
            detail="Admin API returned HTTP 500",
            shop="demo.myshopify.com",
            extra={"status_code": 500},
        )
    """

    def __init__(
        self,
        detail: str,
        *,
        shop: str | None = None,
        type: str = "shopify-api-error",
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.shop = shop
        context = {"shop": shop} if shop else {}
        super().__init__(detail=detail, type=type, extra={**context, **(extra or {})})


class ShopifyThrottledError(ShopifyAPIError):
    """Raised when the Admin API rejects a query for exceeding the cost budget."""

    def __init__(
        self,
        detail: str = "Shopify Admin API rate limit exceeded",
        *,
        shop: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail, shop=shop, type="shopify-throttled", extra=extra)
