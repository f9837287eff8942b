"""HTTP middleware — request logging and per-client rate limiting."""

import logging
import time
from collections import defaultdict, deque

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} "
            f"({elapsed_ms:.1f} ms, client={_client_ip(request)})"
        )
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory sliding-window limiter keyed by client IP.

    Only paths under ``path_prefix`` are counted. State is per process, so the
    limit is per worker when running several. ``X-Forwarded-For`` is honoured
    only with ``trust_forwarded_for`` (deployments behind a known proxy).
    """

    def __init__(
        self,
        app,
        max_requests: int = 100,
        window_seconds: int = 900,
        path_prefix: str = "/api/",
        enabled: bool = True,
        trust_forwarded_for: bool = False,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.enabled = enabled
        self.trust_forwarded_for = trust_forwarded_for
        self._hits: dict[str, deque[float]] = defaultdict(deque)
        self._last_sweep = time.monotonic()

    async def dispatch(self, request: Request, call_next):
        if not self.enabled or not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client = _client_ip(request, self.trust_forwarded_for)
        now = time.monotonic()
        self._sweep_if_needed(now)
        hits = self._hits[client]
        _prune(hits, now - self.window_seconds)

        if len(hits) >= self.max_requests:
            retry_after = max(1, int(hits[0] + self.window_seconds - now))
            logger.warning(f"Rate limit exceeded for {client} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests from this IP, please try again later."},
                headers={"Retry-After": str(retry_after)},
            )

        hits.append(now)
        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(self.max_requests - len(hits))
        return response

    def _sweep_if_needed(self, now: float) -> None:
        """Drop clients whose whole window has expired, at most once per window."""
        if now - self._last_sweep < self.window_seconds:
            return
        cutoff = now - self.window_seconds
        for key in list(self._hits):
            _prune(self._hits[key], cutoff)
            if not self._hits[key]:
                del self._hits[key]
        self._last_sweep = now

    @property
    def tracked_clients(self) -> int:
        return len(self._hits)


def _prune(hits: deque[float], cutoff: float) -> None:
    while hits and hits[0] <= cutoff:
        hits.popleft()


def _client_ip(request: Request, trust_forwarded_for: bool = False) -> str:
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"
