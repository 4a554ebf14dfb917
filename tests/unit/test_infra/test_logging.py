"""Unit tests for logging context, formatter and configuration."""
from __future__ import annotations

import asyncio
import json
import logging
import sys

import pytest

from catalog_service.infra.logging import (
    ContextInjectingFilter,
    JSONFormatter,
    clear_log_context,
    configure_logging,
    get_log_context,
    set_log_context,
)


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("catalog.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _clean_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.mark.unit
class TestLogContext:
    def test_set_merges_and_clear_resets(self):
        set_log_context(request_id="r1")
        set_log_context(shop="demo.myshopify.com")

        assert get_log_context() == {"request_id": "r1", "shop": "demo.myshopify.com"}

        clear_log_context()
        assert get_log_context() == {}

    def test_filter_injects_without_overwriting(self):
        set_log_context(request_id="r1", shop="demo.myshopify.com")
        record = _record(shop="explicit.myshopify.com")

        assert ContextInjectingFilter().filter(record) is True
        assert record.request_id == "r1"
        assert record.shop == "explicit.myshopify.com"

    async def test_context_is_isolated_per_task(self):
        async def handle(request_id: str) -> dict:
            set_log_context(request_id=request_id)
            await asyncio.sleep(0)
            return get_log_context()

        first, second = await asyncio.gather(handle("a"), handle("b"))

        assert first == {"request_id": "a"}
        assert second == {"request_id": "b"}


@pytest.mark.unit
class TestJSONFormatter:
    def test_emits_one_json_line(self):
        formatter = JSONFormatter(static={"service": "catalog-service"})

        line = formatter.format(_record("Products page loaded", page=2, shop="demo.myshopify.com"))

        assert "\n" not in line
        data = json.loads(line)
        assert data["level"] == "INFO"
        assert data["logger"] == "catalog.test"
        assert data["message"] == "Products page loaded"
        assert data["service"] == "catalog-service"
        assert data["page"] == 2
        assert data["shop"] == "demo.myshopify.com"
        assert data["timestamp"].endswith("Z")

    def test_exception_is_single_line(self):
        try:
            raise ValueError("bad\nthing")
        except ValueError:
            record = _record("failed")
            record.exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(record))

        assert "ValueError" in data["exception"]

    def test_unserializable_extras_use_str(self):
        data = json.loads(JSONFormatter().format(_record(obj=object())))

        assert data["obj"].startswith("<object object")


@pytest.mark.unit
class TestConfigureLogging:
    def test_file_handler_writes_json(self, tmp_path):
        log_file = tmp_path / "logs" / "app.jsonl"
        configure_logging(
            log_level="DEBUG",
            file_path=log_file,
            json_logs=False,
            console_enabled=False,
            capture_warnings=False,
            service_name="catalog-service",
        )
        set_log_context(request_id="r9")

        logging.getLogger("catalog_service.test").info("written", extra={"page": 1})
        for handler in logging.getLogger().handlers:
            handler.flush()

        last = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert last["message"] == "written"
        assert last["request_id"] == "r9"
        assert last["service"] == "catalog-service"

        for handler in logging.getLogger().handlers:
            handler.close()
        logging.getLogger().handlers.clear()

    def test_httpx_is_quieted(self):
        configure_logging(console_enabled=False, capture_warnings=False)

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
