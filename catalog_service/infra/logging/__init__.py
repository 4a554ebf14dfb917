"""Logging infrastructure.

Basic usage:
    import logging

    from catalog_service.infra.logging import set_log_context

    logger = logging.getLogger(__name__)

    set_log_context(shop="demo.myshopify.com")
    logger.info("Fetching products")  # Record carries the shop field
"""

from catalog_service.infra.logging.config import configure_logging, setup_logging
from catalog_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from catalog_service.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "set_log_context",
    "setup_logging",
]
