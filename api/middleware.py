"""
HTTP Middleware

Security response headers and per-client rate limiting.

The rate limiter is a token bucket per client IP: each client starts with
``burst_size`` tokens, every request spends one, and tokens refill at
``requests_per_second`` up to the burst size. Health and docs paths are
exempt.
"""

from __future__ import annotations

import logging
import math
import time
from threading import Lock
from typing import Callable, Dict, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from api.errors import RateLimitedError
from core.config.runtime import RateLimitConfig


logger = logging.getLogger(__name__)


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}

# Buckets idle this long are dropped during cleanup.
STALE_BUCKET_SECONDS = 600
CLEANUP_THRESHOLD = 10000


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers[name] = value
        return response


class TokenBucketLimiter:
    """
    Token bucket rate limiter keyed by client identifier.

    Thread-safe for concurrent access.
    """

    def __init__(
        self,
        requests_per_second: float,
        burst_size: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        if burst_size < 1:
            raise ValueError("burst_size must be at least 1")
        self.rate = float(requests_per_second)
        self.burst = int(burst_size)
        self._clock = clock
        self._buckets: Dict[str, Tuple[float, float]] = {}  # key -> (tokens, last_refill)
        self._lock = Lock()

    def allow(self, key: str) -> Tuple[bool, float]:
        """
        Spend one token for ``key``.

        Returns:
            (allowed, retry_after_seconds). retry_after is 0 when allowed.
        """
        now = self._clock()
        with self._lock:
            tokens, last = self._buckets.get(key, (float(self.burst), now))
            tokens = min(float(self.burst), tokens + (now - last) * self.rate)

            if tokens < 1.0:
                self._buckets[key] = (tokens, now)
                return False, (1.0 - tokens) / self.rate

            self._buckets[key] = (tokens - 1.0, now)

            if len(self._buckets) > CLEANUP_THRESHOLD:
                self._cleanup_unsafe(now)

            return True, 0.0

    def _cleanup_unsafe(self, now: float) -> None:
        """Drop idle buckets (caller must hold lock)."""
        self._buckets = {
            key: bucket for key, bucket in self._buckets.items()
            if now - bucket[1] < STALE_BUCKET_SECONDS
        }

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware to apply rate limiting to all API endpoints.
    """

    EXEMPT_PATHS = ["/health", "/docs", "/redoc", "/openapi.json"]

    def __init__(self, app, config: RateLimitConfig) -> None:
        super().__init__(app)
        self.limiter = TokenBucketLimiter(config.requests_per_second, config.burst_size)

    async def dispatch(self, request: Request, call_next):
        if any(request.url.path.startswith(path) for path in self.EXEMPT_PATHS):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        allowed, retry_after = self.limiter.allow(client_ip)

        if not allowed:
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            error = RateLimitedError()
            return JSONResponse(
                status_code=error.status_code,
                content=error.to_response().model_dump(),
                headers={"Retry-After": str(max(1, math.ceil(retry_after)))},
            )

        return await call_next(request)
