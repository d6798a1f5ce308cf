"""Tests for the credential endpoint rate limiter."""

from __future__ import annotations

from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.responses import JSONResponse

from flagleague.middleware.rate_limit import AuthRateLimitMiddleware


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(AuthRateLimitMiddleware)

    @app.post("/api/auth/login")
    async def login() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/teams")
    async def teams() -> dict[str, str]:
        return {"status": "ok"}

    return app


class TestAuthRateLimitMiddleware:
    def test_login_limited_after_threshold(self) -> None:
        with patch("flagleague.middleware.rate_limit.settings") as mock_settings:
            mock_settings.auth_rate_limit_requests = 2
            mock_settings.auth_rate_limit_window_seconds = 60
            client = TestClient(_app())

            assert client.post("/api/auth/login").status_code == 200
            assert client.post("/api/auth/login").status_code == 200
            response = client.post("/api/auth/login")

        assert response.status_code == 429
        assert response.json() == {"detail": "Too many attempts, try again later"}

    def test_other_paths_not_limited(self) -> None:
        with patch("flagleague.middleware.rate_limit.settings") as mock_settings:
            mock_settings.auth_rate_limit_requests = 1
            mock_settings.auth_rate_limit_window_seconds = 60
            client = TestClient(_app())

            statuses = [client.get("/api/teams").status_code for _ in range(3)]

        assert statuses == [200, 200, 200]

    def test_login_and_register_counted_separately(self) -> None:
        with patch("flagleague.middleware.rate_limit.settings") as mock_settings:
            mock_settings.auth_rate_limit_requests = 1
            mock_settings.auth_rate_limit_window_seconds = 60
            app = _app()

            @app.post("/api/auth/register")
            async def register() -> dict[str, str]:
                return {"status": "ok"}

            client = TestClient(app)
            assert client.post("/api/auth/login").status_code == 200
            assert client.post("/api/auth/login").status_code == 429
            assert client.post("/api/auth/register").status_code == 200


async def _ok_app(scope, receive, send) -> None:
    response = JSONResponse({"status": "ok"})
    await response(scope, receive, send)


class TestAuthRateLimitKeys:
    def test_expired_keys_are_removed(self) -> None:
        middleware = AuthRateLimitMiddleware(_ok_app)
        client = TestClient(middleware)

        with patch("flagleague.middleware.rate_limit.settings") as mock_settings, patch(
            "flagleague.middleware.rate_limit.time"
        ) as mock_time:
            mock_settings.auth_rate_limit_requests = 5
            mock_settings.auth_rate_limit_window_seconds = 60

            mock_time.time.return_value = 1_000.0
            assert client.post("/api/auth/login").status_code == 200
            assert client.post("/api/auth/register").status_code == 200
            assert len(middleware._requests) == 2

            mock_time.time.return_value = 1_100.0
            assert client.get("/api/teams").status_code == 200
            assert len(middleware._requests) == 2

            # The next credential request sweeps both stale keys first.
            assert client.post("/api/auth/login").status_code == 200

        assert list(middleware._requests) == [("testclient", "/api/auth/login")]
        assert len(middleware._requests[("testclient", "/api/auth/login")]) == 1

    def test_window_reopens_after_expiry(self) -> None:
        middleware = AuthRateLimitMiddleware(_ok_app)
        client = TestClient(middleware)

        with patch("flagleague.middleware.rate_limit.settings") as mock_settings, patch(
            "flagleague.middleware.rate_limit.time"
        ) as mock_time:
            mock_settings.auth_rate_limit_requests = 1
            mock_settings.auth_rate_limit_window_seconds = 60

            mock_time.time.return_value = 1_000.0
            assert client.post("/api/auth/login").status_code == 200
            assert client.post("/api/auth/login").status_code == 429

            mock_time.time.return_value = 1_061.0
            assert client.post("/api/auth/login").status_code == 200
