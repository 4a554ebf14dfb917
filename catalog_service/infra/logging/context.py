"""Context management for structured logging.

Provides automatic context injection into log records using contextvars,
so request IDs and the authenticated shop are included in every log
message without explicit passing. Each asyncio task gets its own copy.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Set logging context for the current task.

    Args:
        **kwargs: Key-value pairs to add to logging context
            (request_id, shop, ...).

    Example:
        ```python
        set_log_context(request_id="abc-123")
        set_log_context(shop="demo.myshopify.com")
        logger.info("Fetching products")  # Includes request_id and shop
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Get a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current task."""
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Logging filter that copies the current log context onto each LogRecord.

    Attached to the console/file handlers so every logger benefits.
    Existing record attributes are never overwritten.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
