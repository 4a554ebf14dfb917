"""Unified settings composition for convenient access.

Usage:
    from catalog_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)
    print(settings.shopify.api_version)

Each nested settings class still loads from its own environment prefix
(APP_, LOG_, SHOPIFY_).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .app import AppSettings
from .logs import LoggingSettings
from .shopify import ShopifySettings


class Settings(BaseSettings):
    """Unified settings composing all domain settings.

    Example:
        settings = Settings()
        assert settings.app.debug is False
        assert settings.shopify.default_page_size == 10
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    shopify: ShopifySettings = Field(default_factory=ShopifySettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get unified settings instance (cached).

    Returns:
        Settings: Unified settings with all domain configurations.
    """
    return Settings()
