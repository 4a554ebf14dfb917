"""Unit tests for RequestIDMiddleware."""
from __future__ import annotations

import uuid

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from catalog_service.app.middleware import RequestIDMiddleware, configure_middleware
from catalog_service.core.settings import LoggingSettings
from catalog_service.infra.logging import get_log_context


class TestRequestIDMiddleware:
    """Test suite for RequestIDMiddleware."""

    @pytest.fixture
    def app(self) -> FastAPI:
        app = FastAPI()
        app.add_middleware(RequestIDMiddleware)

        @app.get("/test")
        async def test_endpoint(request: Request):
            return {
                "state": request.state.request_id,
                "log_context": get_log_context().get("request_id"),
            }

        return app

    @pytest.fixture
    async def client(self, app: FastAPI):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac

    async def test_generates_request_id_when_not_provided(self, client: AsyncClient):
        response = await client.get("/test")

        assert response.status_code == 200
        request_id = response.headers["x-request-id"]
        assert str(uuid.UUID(request_id)) == request_id
        assert response.json() == {"state": request_id, "log_context": request_id}

    async def test_propagates_incoming_request_id(self, client: AsyncClient):
        response = await client.get("/test", headers={"X-Request-ID": "abc-123"})

        assert response.headers["x-request-id"] == "abc-123"
        assert response.json()["state"] == "abc-123"

    async def test_each_request_gets_its_own_id(self, client: AsyncClient):
        first = await client.get("/test")
        second = await client.get("/test")

        assert first.headers["x-request-id"] != second.headers["x-request-id"]


@pytest.mark.unit
class TestConfigureMiddleware:
    def test_enabled_by_default(self):
        app = FastAPI()

        configure_middleware(app, LoggingSettings(include_request_id=True))

        assert [m.cls for m in app.user_middleware] == [RequestIDMiddleware]

    def test_can_be_disabled(self):
        app = FastAPI()

        configure_middleware(app, LoggingSettings(include_request_id=False))

        assert app.user_middleware == []
