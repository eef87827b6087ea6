"""
MockAPI — Middleware Tests
===========================

What:  Tests for request IDs, API headers, simulated latency, CORS and access logging.
How:   The full app for header/CORS behavior; a bare FastAPI app with an
       injected sleep recorder for latency so no test actually waits.
"""

import logging
import random

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from mockapi.config import Settings
from mockapi.main import create_app
from mockapi.middleware.latency import LatencyMiddleware


class TestRequestID:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_client_id_echoed(self, test_client):
        response = await test_client.get("/api/movies", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_included_in_error_body(self, test_client):
        response = await test_client.get("/api/users/99", headers={"X-Request-ID": "err-1"})
        assert response.json()["request_id"] == "err-1"


class TestAPIHeaders:

    @pytest.mark.asyncio
    async def test_version_and_response_time(self, test_client):
        response = await test_client.get("/api/products")
        assert response.headers["X-API-Version"] == "1.0"
        assert int(response.headers["X-Response-Time"]) > 1_600_000_000_000

    @pytest.mark.asyncio
    async def test_present_on_errors(self, test_client):
        response = await test_client.get("/api/widgets")
        assert response.status_code == 404
        assert "X-API-Version" in response.headers


class TestCORS:

    @pytest.mark.asyncio
    async def test_preflight_allowed_origin(self, test_client):
        response = await test_client.options(
            "/api/products",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_simple_request_allowed_origin(self, test_client):
        response = await test_client.get(
            "/api/products", headers={"Origin": "http://localhost:3000"}
        )
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    @pytest.mark.asyncio
    async def test_unknown_origin_not_allowed(self, test_client):
        response = await test_client.get(
            "/api/products", headers={"Origin": "http://evil.example"}
        )
        assert "access-control-allow-origin" not in response.headers


class TestLatency:

    def _app(self, delays, **kwargs):
        async def record_sleep(seconds):
            delays.append(seconds)

        app = FastAPI()

        @app.get("/ping")
        async def ping():
            return {"ok": True}

        app.add_middleware(LatencyMiddleware, sleep=record_sleep, **kwargs)
        return app

    @pytest.mark.asyncio
    async def test_delay_within_window(self):
        delays = []
        app = self._app(delays, min_ms=200, max_ms=700, rng=random.Random(7))
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            for _ in range(5):
                assert (await client.get("/ping")).status_code == 200

        assert len(delays) == 5
        assert all(0.2 <= d <= 0.7 for d in delays)

    @pytest.mark.asyncio
    async def test_options_not_delayed(self):
        delays = []
        app = self._app(delays)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            await client.options("/ping")
        assert delays == []

    def test_fixed_window(self):
        middleware = LatencyMiddleware(FastAPI(), min_ms=300, max_ms=300)
        assert middleware.next_delay() == pytest.approx(0.3)

    def test_enabled_outside_production(self):
        app = create_app(config=Settings(environment="development", latency_enabled=None))
        assert any(m.cls is LatencyMiddleware for m in app.user_middleware)

    def test_disabled_in_production(self):
        app = create_app(config=Settings(environment="production", latency_enabled=None))
        assert not any(m.cls is LatencyMiddleware for m in app.user_middleware)

    def test_explicit_flag_wins(self):
        app = create_app(config=Settings(environment="production", latency_enabled=True))
        assert any(m.cls is LatencyMiddleware for m in app.user_middleware)


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_request_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="mockapi.access")
        await test_client.get("/api/products", params={"sort": "rating"})

        lines = [r for r in caplog.records if r.name == "mockapi.access"]
        assert len(lines) == 1
        assert "GET /api/products?sort=rating 200" in lines[0].getMessage()
        assert lines[0].levelno == logging.INFO

    @pytest.mark.asyncio
    async def test_client_errors_logged_as_warning(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="mockapi.access")
        await test_client.get("/api/widgets")

        lines = [r for r in caplog.records if r.name == "mockapi.access"]
        assert lines[0].levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="mockapi.access")
        await test_client.get("/api/health")
        assert not [r for r in caplog.records if r.name == "mockapi.access"]
