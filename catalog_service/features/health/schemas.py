"""Health check schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LivenessResponse(BaseModel):
    """Liveness probe response.

    Example:
        ```json
        {
            "status": "ok",
            "timestamp": "2025-01-01T00:00:00Z",
            "service": "catalog-service",
            "version": "1.0.0",
            "shopifyConfigured": true
        }
        ```
    """

    status: str = Field(default="ok", description="Liveness status")
    timestamp: datetime = Field(description="Check timestamp")
    service: str = Field(min_length=1, max_length=100, description="Service name")
    version: str = Field(description="Application version")
    shopify_configured: bool = Field(
        alias="shopifyConfigured",
        description="Whether signed admin requests can be verified",
    )

    model_config = ConfigDict(populate_by_name=True)
