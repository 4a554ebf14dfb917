"""Pytest configuration and shared fixtures.

Organization:
    - Application Fixtures: FastAPI app and HTTP client
    - Shopify Fixtures: in-memory product catalog served through httpx.MockTransport
"""

from __future__ import annotations

import json
import os
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from tests.utils import TEST_ACCESS_TOKEN, TEST_SECRET, TEST_SHOP, ShopifyStub, make_products

# Ensure tests run without real Shopify credentials
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("SHOPIFY_API_SECRET", TEST_SECRET)
os.environ.setdefault("SHOPIFY_ACCESS_TOKENS", json.dumps({TEST_SHOP: TEST_ACCESS_TOKEN}))


# ============================================================================
# Shopify Fixtures
# ============================================================================


@pytest.fixture
def catalog() -> list[dict[str, Any]]:
    """23 products: pages of 10 are 10, 10 and 3 long."""
    return make_products(23)


@pytest.fixture
def shopify_stub(catalog: list[dict[str, Any]]) -> ShopifyStub:
    return ShopifyStub(catalog)


@pytest.fixture
async def shopify_client(shopify_stub: ShopifyStub):
    """Admin API client whose requests are served by ``shopify_stub``."""
    from catalog_service.infra.shopify import ShopifyAdminClient

    async with ShopifyAdminClient(transport=httpx.MockTransport(shopify_stub)) as client:
        yield client


@pytest.fixture
def admin(shopify_client):
    """Authenticated Admin API capability for the test shop."""
    from catalog_service.infra.shopify import AdminApi

    return AdminApi(shop=TEST_SHOP, access_token=TEST_ACCESS_TOKEN, client=shopify_client)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(shopify_client):
    """Create FastAPI application for testing.

    The lifespan does not run under ASGITransport, so the Admin API client
    is attached to ``app.state`` here, backed by ``shopify_stub``.
    """
    from catalog_service.app.main import create_app

    application = create_app()
    application.state.shopify_client = shopify_client
    return application


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing.

    Example:
        async def test_health_check(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
