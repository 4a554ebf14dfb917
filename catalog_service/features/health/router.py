"""Health check endpoint."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, status

from catalog_service.core.settings import get_app_settings, get_shopify_settings
from catalog_service.features.health.schemas import LivenessResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=LivenessResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Returns 200 if the service process is alive and responsive",
)
async def liveness_check() -> LivenessResponse:
    """Liveness probe; never calls the Admin API."""
    app_settings = get_app_settings()
    return LivenessResponse(
        timestamp=datetime.now(UTC),
        service=app_settings.service_name,
        version=app_settings.version,
        shopify_configured=get_shopify_settings().is_configured,
    )
