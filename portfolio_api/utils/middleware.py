import logging
import math
import threading
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from portfolio_api.utils.response import create_response

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-XSS-Protection": "0",
    # Uploaded images are embedded by the frontend from another origin.
    "Cross-Origin-Resource-Policy": "cross-origin",
}


def client_ip(request: Request, trust_proxy: bool = False) -> str:
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, trust_proxy: bool = False):
        super().__init__(app)
        self.trust_proxy = trust_proxy

    async def dispatch(self, request: Request, call_next):
        ip = client_ip(request, self.trust_proxy)
        logger.info("%s %s - IP: %s", request.method, request.url.path, ip)
        return await call_next(request)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request limiter keyed by client IP.

    Forwarded headers are only used for the key when ``trust_proxy`` is set.
    Expired windows are pruned at most once per window.
    """

    def __init__(
        self,
        app,
        max_requests: int,
        window_seconds: int,
        path_prefix: str = "/api",
        trust_proxy: bool = False,
        clock=time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.trust_proxy = trust_proxy
        self.clock = clock
        self._hits: dict[str, tuple[float, int]] = {}
        self._last_prune = clock()
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        if now - self._last_prune < self.window_seconds:
            return
        self._hits = {
            key: (window_start, count)
            for key, (window_start, count) in self._hits.items()
            if now - window_start < self.window_seconds
        }
        self._last_prune = now

    def _register_hit(self, key: str) -> tuple[int, float]:
        now = self.clock()
        with self._lock:
            self._prune(now)
            window_start, count = self._hits.get(key, (now, 0))
            if now - window_start >= self.window_seconds:
                window_start, count = now, 0
            count += 1
            self._hits[key] = (window_start, count)
        reset_in = max(0.0, self.window_seconds - (now - window_start))
        return count, reset_in

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix) or request.method == "OPTIONS":
            return await call_next(request)

        ip = client_ip(request, self.trust_proxy)
        count, reset_in = self._register_hit(ip)
        headers = {
            "RateLimit-Limit": str(self.max_requests),
            "RateLimit-Remaining": str(max(0, self.max_requests - count)),
            "RateLimit-Reset": str(math.ceil(reset_in)),
        }
        if count > self.max_requests:
            logger.warning("Rate limit exceeded for %s", ip)
            return create_response(
                message="Too many requests from this IP, please try again later.",
                status_code=429,
                headers=headers,
                retry_after=math.ceil(reset_in),
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
