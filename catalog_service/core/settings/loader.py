"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from catalog_service.core.settings.loader import get_app_settings

    settings = get_app_settings()  # First call: loads and validates
    settings = get_app_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    clear_all_caches()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .logs import LoggingSettings
from .shopify import ShopifySettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings.

    Returns:
        Validated and frozen AppSettings instance.
    """
    return AppSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_shopify_settings() -> ShopifySettings:
    """Get cached Shopify settings.

    Returns:
        Validated and frozen ShopifySettings instance.
    """
    return ShopifySettings()


def clear_all_caches() -> None:
    """Clear every settings cache (tests and reloads)."""
    from .unified import get_settings

    get_app_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_shopify_settings.cache_clear()
    get_settings.cache_clear()
