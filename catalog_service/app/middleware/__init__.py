"""Middleware configuration for FastAPI application."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from catalog_service.app.middleware.request_id import RequestIDMiddleware
from catalog_service.core.settings import get_logging_settings

if TYPE_CHECKING:
    from fastapi import FastAPI

    from catalog_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)


def configure_middleware(app: FastAPI, log_settings: LoggingSettings | None = None) -> None:
    """Configure middleware for the application.

    Args:
        app: FastAPI application instance.
        log_settings: Optional logging settings override.
    """
    log_settings = log_settings or get_logging_settings()

    if log_settings.include_request_id:
        app.add_middleware(RequestIDMiddleware)
        logger.debug("Request ID middleware enabled")


__all__ = ["RequestIDMiddleware", "configure_middleware"]
