"""Application lifespan management.

Startup Order:
1. Logging - always runs first
2. Shopify Admin API client - one pooled httpx client for the process

Shutdown Order: Reverse of startup
"""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from catalog_service.core.settings import (
    get_app_settings,
    get_logging_settings,
    get_shopify_settings,
)
from catalog_service.infra.logging.config import setup_logging
from catalog_service.infra.shopify import ShopifyAdminClient

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan events.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    app_settings = get_app_settings()
    log_settings = get_logging_settings()
    shopify_settings = get_shopify_settings()

    setup_logging(log_settings=log_settings, force=True)
    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "environment": app_settings.environment,
            "version": app_settings.version,
        },
    )

    if not shopify_settings.is_configured:
        logger.warning(
            "Shopify app secret is not configured; admin requests will be rejected",
            extra={"setting": "SHOPIFY_API_SECRET"},
        )

    app.state.shopify_client = ShopifyAdminClient(
        api_version=shopify_settings.api_version,
        timeout=shopify_settings.request_timeout,
    )
    logger.info(
        "Shopify Admin API client initialized",
        extra={
            "api_version": shopify_settings.api_version,
            "timeout": shopify_settings.request_timeout,
            "shops": len(shopify_settings.access_tokens),
        },
    )

    try:
        yield
    finally:
        logger.info("Application shutting down")
        await app.state.shopify_client.close()
        app.state.shopify_client = None
        logger.info("Application shutdown complete")
