"""
NameScout - Edge Rate Limiting
Fixed-window, in-memory, per-client limiter applied to every /api/ request.
Coarse abuse guard only: state is lost on restart and resets every window.
"""
import logging
import math
import time
from dataclasses import dataclass
from typing import Mapping

from limits import RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger("namescout.edge")

UNKNOWN_CLIENT = "unknown"


def get_client_identity(headers: Mapping[str, str]) -> str:
    """
    Throttling key for a request.

    First entry of X-Forwarded-For, else X-Real-IP, else ``"unknown"``.
    Not authenticated; proxies and NAT can merge many people into one key.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_CLIENT


@dataclass(frozen=True)
class EdgeDecision:
    allowed: bool
    remaining: int
    reset_time: float


class EdgeRateLimiter:
    """
    ``max_requests`` per client per ``window_seconds``.

    Backed by a fixed-window strategy over its own in-memory ``limits``
    storage, so every app (and every test) gets isolated counters. The
    storage expires finished windows itself.
    """

    def __init__(self, max_requests: int = 20, window_seconds: int = 60):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.item = RateLimitItemPerSecond(max_requests, window_seconds)
        self._storage = MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self._storage)

    def check(self, client_id: str) -> EdgeDecision:
        allowed = self._strategy.hit(self.item, client_id)
        stats = self._strategy.get_window_stats(self.item, client_id)
        return EdgeDecision(allowed, stats.remaining, stats.reset_time)

    def retry_after(self, decision: EdgeDecision) -> int:
        """Whole seconds until the client's window resets (at least 1)."""
        return max(1, math.ceil(decision.reset_time - time.time()))


class EdgeRateLimitMiddleware(BaseHTTPMiddleware):
    """
    Applies an :class:`EdgeRateLimiter` to every path under ``/api/``.

    Allowed responses carry X-RateLimit-Limit / X-RateLimit-Remaining.
    Denied requests never reach the router: 429 with Retry-After.
    """

    def __init__(self, app, limiter: EdgeRateLimiter, path_prefix: str = "/api/"):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_id = get_client_identity(request.headers)
        decision = self.limiter.check(client_id)
        limit = str(self.limiter.max_requests)

        if not decision.allowed:
            retry_after = self.limiter.retry_after(decision)
            logger.info("Edge limit hit for %s on %s", client_id, request.url.path)
            return JSONResponse(
                status_code=429,
                content={
                    "error": "Too many requests. Please try again later.",
                    "retryAfter": retry_after,
                },
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": limit,
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = limit
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response
