"""Shopify Admin API integration."""

from catalog_service.infra.shopify.client import AdminApi, ShopifyAdminClient
from catalog_service.infra.shopify.exceptions import ShopifyAPIError, ShopifyThrottledError

__all__ = [
    "AdminApi",
    "ShopifyAPIError",
    "ShopifyAdminClient",
    "ShopifyThrottledError",
]
