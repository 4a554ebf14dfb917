"""Shopify Admin API settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShopifySettings(BaseSettings):
    """Shopify app credentials and Admin API options.

    Environment variables use SHOPIFY_ prefix.
    Example:
        SHOPIFY_API_SECRET=shpss_...
        SHOPIFY_ACCESS_TOKENS='{"demo.myshopify.com": "shpat_..."}'
    """

    # App credentials
    api_key: str | None = Field(
        default=None,
        description="App API key (client id)",
    )
    api_secret: SecretStr | None = Field(
        default=None,
        description="App API secret used to verify signed admin requests",
    )
    access_tokens: dict[str, SecretStr] = Field(
        default_factory=dict,
        description="Offline Admin API access tokens keyed by shop domain (JSON object)",
    )

    # Admin API
    api_version: str = Field(
        default="2024-10",
        pattern=r"^(\d{4}-\d{2}|unstable)$",
        description="Admin API version (YYYY-MM)",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        le=300.0,
        description="Admin API request timeout in seconds",
    )
    hmac_max_age_seconds: int = Field(
        default=86_400,
        ge=1,
        description="Maximum age of a signed admin request timestamp",
    )

    # Pagination
    default_page_size: int = Field(
        default=10,
        ge=1,
        le=250,
        description="Page size used when the submitted value is missing or invalid",
    )
    max_page_size: int = Field(
        default=250,
        ge=1,
        le=250,
        description="Largest page size forwarded to the Admin API",
    )
    page_size_options: list[int] = Field(
        default_factory=lambda: [10, 25, 50, 200],
        description="Page sizes offered in the page-size select",
    )

    model_config = SettingsConfigDict(
        env_prefix="SHOPIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @field_validator("access_tokens", mode="before")
    @classmethod
    def _normalize_shop_keys(cls, v: Any) -> Any:
        """Lower-case shop domains so lookups are case-insensitive."""
        if isinstance(v, dict):
            return {str(shop).strip().lower(): token for shop, token in v.items()}
        return v

    @model_validator(mode="after")
    def validate_page_sizes(self) -> ShopifySettings:
        """Ensure the defaults fit under the Admin API maximum."""
        if self.default_page_size > self.max_page_size:
            msg = "default_page_size cannot exceed max_page_size"
            raise ValueError(msg)
        if any(size < 1 or size > self.max_page_size for size in self.page_size_options):
            msg = f"page_size_options must be between 1 and {self.max_page_size}"
            raise ValueError(msg)
        return self

    @property
    def is_configured(self) -> bool:
        """Check if signed admin requests can be verified."""
        return self.api_secret is not None and bool(self.api_secret.get_secret_value())

    def access_token_for(self, shop: str) -> str | None:
        """Look up the Admin API access token for a shop."""
        token = self.access_tokens.get(shop.lower())
        return token.get_secret_value() if token else None
