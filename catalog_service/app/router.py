"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_service.core.settings import get_app_settings
from catalog_service.features.health.router import router as health_router
from catalog_service.features.products.router import router as products_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from catalog_service.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the page path.
    """
    app_settings = app_settings or get_app_settings()

    app.include_router(health_router)
    app.include_router(products_router, prefix=app_settings.page_path)

    logger.debug(
        "Routers configured",
        extra={"page_path": app_settings.page_path},
    )
