"""Shopify dependencies: the shared Admin API client and the auth gate.

Usage:
    from catalog_service.core.dependencies.shopify import AdminApiDep

    @router.post("/app")
    async def action(admin: AdminApiDep):
        data = await admin.graphql("{ shop { name } }")
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request

from catalog_service.core.exceptions import ServiceUnavailableException, UnauthorizedException
from catalog_service.core.settings import ShopifySettings, get_shopify_settings
from catalog_service.infra.auth import verify_signed_params
from catalog_service.infra.logging import set_log_context
from catalog_service.infra.shopify import AdminApi, ShopifyAdminClient

logger = logging.getLogger(__name__)


def get_shopify_client(request: Request) -> ShopifyAdminClient:
    """Return the pooled Admin API client created at startup."""
    client: ShopifyAdminClient | None = getattr(request.app.state, "shopify_client", None)
    if client is None:
        raise ServiceUnavailableException(
            detail="Shopify Admin API client is not initialized",
            type="shopify-client-unavailable",
        )
    return client


ShopifySettingsDep = Annotated[ShopifySettings, Depends(get_shopify_settings)]
ShopifyClientDep = Annotated[ShopifyAdminClient, Depends(get_shopify_client)]


async def authenticate_admin(
    request: Request,
    settings: ShopifySettingsDep,
    client: ShopifyClientDep,
) -> AdminApi:
    """Authenticate an admin request and return an Admin API capability.

    Verifies the Shopify-signed query parameters of the request, then
    resolves the shop's offline access token from configuration.

    Raises:
        ServiceUnavailableException: The app secret is not configured.
        UnauthorizedException: Signature, timestamp, shop or token check failed.
    """
    if not settings.is_configured:
        raise ServiceUnavailableException(
            detail="Shopify app credentials are not configured",
            extra={"setting": "SHOPIFY_API_SECRET"},
        )

    shop = verify_signed_params(
        request.query_params.multi_items(),
        settings.api_secret.get_secret_value(),
        settings.hmac_max_age_seconds,
    )

    access_token = settings.access_token_for(shop)
    if not access_token:
        logger.warning("No access token configured for shop", extra={"shop": shop})
        raise UnauthorizedException(
            detail="Shop has not installed this app",
            type="shop-not-installed",
            extra={"shop": shop},
        )

    set_log_context(shop=shop)
    return AdminApi(shop=shop, access_token=access_token, client=client)


AdminApiDep = Annotated[AdminApi, Depends(authenticate_admin)]
