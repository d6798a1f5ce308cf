"""In-memory rate limiting for the login and registration endpoints."""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable, Deque

from fastapi import Request
from starlette.responses import JSONResponse

from ..config import settings

logger = logging.getLogger(__name__)

RATE_LIMITED_PATHS = frozenset({"/api/auth/login", "/api/auth/register"})


class AuthRateLimitMiddleware:
    """Sliding window limiter keyed on (client IP, credential path).

    Login and registration attempts are counted separately. Keys whose
    window has emptied are dropped.
    """

    def __init__(self, app: Callable) -> None:
        self.app = app
        self._requests: dict[tuple[str, str], Deque[float]] = {}
        self._last_sweep = 0.0

    def _prune(self, key: tuple[str, str], now: float, window: int) -> Deque[float] | None:
        request_times = self._requests.get(key)
        if request_times is None:
            return None
        while request_times and request_times[0] <= now - window:
            request_times.popleft()
        if not request_times:
            del self._requests[key]
            return None
        return request_times

    def _sweep(self, now: float, window: int) -> None:
        """Drop every key with no request inside the window, at most once per window."""
        if now - self._last_sweep < window:
            return
        self._last_sweep = now
        for key in list(self._requests):
            self._prune(key, now, window)

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        path = scope.get("path", "").rstrip("/")
        if scope["type"] != "http" or path not in RATE_LIMITED_PATHS:
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        client_ip = request.client.host if request.client else "unknown"
        key = (client_ip, path)
        now = time.time()
        window = settings.auth_rate_limit_window_seconds

        self._sweep(now, window)
        request_times = self._prune(key, now, window)
        if request_times is not None and len(request_times) >= settings.auth_rate_limit_requests:
            logger.warning("auth_rate_limited", extra={"client_ip": client_ip, "path": path})
            response = JSONResponse({"detail": "Too many attempts, try again later"}, status_code=429)
            await response(scope, receive, send)
            return

        self._requests.setdefault(key, deque()).append(now)
        await self.app(scope, receive, send)
