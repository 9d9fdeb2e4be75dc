"""Tests for request id, rate limiting and the exception-to-HTTP mapping."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from medmall.exceptions import DatabaseError, NotFoundError
from medmall.main import create_app
from medmall.middleware.rate_limit import RateLimitMiddleware


def limited_app(max_requests: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, max_requests=max_requests, window_seconds=60)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


class TestRequestId:
    @pytest.mark.asyncio
    async def test_generated_when_absent(self, client):
        response = await client.get("/health")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_caller_id_is_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, client):
        response = await client.get("/api/refunds", headers={"X-Request-ID": "trace-401"})

        assert response.json()["request_id"] == "trace-401"


class TestRateLimit:
    @pytest.mark.asyncio
    async def test_rejects_after_limit_with_retry_after(self):
        transport = ASGITransport(app=limited_app(max_requests=2))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            first = await client.get("/ping")
            second = await client.get("/ping")
            third = await client.get("/ping")

        assert first.status_code == 200
        assert second.status_code == 200
        assert third.status_code == 429
        assert int(third.headers["Retry-After"]) >= 1
        assert third.json()["error"] == "rate_limit_exceeded"

    @pytest.mark.asyncio
    async def test_health_is_never_limited(self):
        transport = ASGITransport(app=limited_app(max_requests=1))
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            responses = [await client.get("/health") for _ in range(5)]

        assert all(r.status_code == 200 for r in responses)


class TestExceptionMapping:
    def _app_raising(self, exc: Exception) -> FastAPI:
        app = create_app()

        @app.get("/boom")
        async def boom():
            raise exc

        return app

    @pytest.mark.asyncio
    async def test_database_error_hides_details(self):
        app = self._app_raising(DatabaseError(context={"sql": "SELECT secret"}))
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "secret" not in response.text

    @pytest.mark.asyncio
    async def test_not_found_maps_to_404(self):
        app = self._app_raising(NotFoundError(resource="refund", resource_id="42"))
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/boom")

        assert response.status_code == 404
        assert response.json()["details"]["resource"] == "refund"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self):
        app = self._app_raising(RuntimeError("kaboom"))
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert "kaboom" not in response.text
