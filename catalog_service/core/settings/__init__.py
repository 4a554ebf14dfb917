"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app/logging/shopify), read from environment
variables and an optional .env file, frozen, and cached by loader functions:

    from catalog_service.core.settings import get_shopify_settings

    settings = get_shopify_settings()
    print(settings.api_version)

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
    4. secrets_dir
"""

from __future__ import annotations

from .app import AppSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_logging_settings,
    get_shopify_settings,
)
from .logs import LoggingSettings
from .shopify import ShopifySettings
from .unified import Settings, get_settings

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "Settings",
    "ShopifySettings",
    "clear_all_caches",
    "get_app_settings",
    "get_logging_settings",
    "get_settings",
    "get_shopify_settings",
]
