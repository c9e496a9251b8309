"""HTTP middleware: security headers, rate limiting, body size limit and error guard."""

import logging
import time
from collections.abc import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from oked_assistant.errors import PayloadTooLargeError

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "script-src 'self'; "
        "img-src 'self' data: https:; "
        "connect-src 'self' https://api.anthropic.com"
    ),
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains; preload",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
}


class FixedWindowRateLimiter:
    """Counts requests per client within fixed time windows.

    A client's window starts with its first request; once ``max_requests``
    have been seen, further requests are rejected until the window ends.
    Clients whose window has ended are swept out at most once per window.
    """

    def __init__(
        self,
        window_seconds: int,
        max_requests: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._window = window_seconds
        self._max = max_requests
        self._clock = clock
        self._hits: dict[str, tuple[float, int]] = {}
        self._last_sweep = clock()

    def hit(self, client_id: str) -> bool:
        """Record a request.

        Returns:
            True if the request is allowed, False if over the limit
        """
        now = self._clock()
        if now - self._last_sweep >= self._window:
            self._sweep(now)

        window_start, count = self._hits.get(client_id, (now, 0))
        if now - window_start >= self._window:
            window_start, count = now, 0
        count += 1
        self._hits[client_id] = (window_start, count)
        return count <= self._max

    def _sweep(self, now: float) -> None:
        stale = [cid for cid, (start, _) in self._hits.items() if now - start >= self._window]
        for client_id in stale:
            del self._hits[client_id]
        self._last_sweep = now

    @property
    def tracked_clients(self) -> int:
        return len(self._hits)

    def reset(self) -> None:
        self._hits.clear()


def client_address(request: Request) -> str:
    """Client address with one trusted proxy hop.

    The proxy appends the peer it saw to X-Forwarded-For, so the last entry
    is the first address not controlled by the client.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
        if hops:
            return hops[-1]
    return request.client.host if request.client else "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds CSP, HSTS and related headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects clients over the fixed-window request cap with 429."""

    def __init__(self, app: ASGIApp, limiter: FixedWindowRateLimiter) -> None:
        super().__init__(app)
        self._limiter = limiter

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        address = client_address(request)
        if not self._limiter.hit(address):
            logger.warning("Rate limit exceeded for %s", address)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests from this IP"},
            )
        return await call_next(request)


class BodySizeLimitMiddleware:
    """Caps request bodies at ``max_bytes``.

    A declared Content-Length over the cap is rejected before the app runs.
    Otherwise bytes are counted as they are received, so chunked bodies are
    capped too; the overflow surfaces as PayloadTooLargeError (413) from
    whichever handler is reading the body.
    """

    def __init__(self, app: ASGIApp, max_bytes: int) -> None:
        self.app = app
        self._max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = Headers(scope=scope).get("content-length")
        if length is not None and length.isdigit() and int(length) > self._max_bytes:
            response = JSONResponse(
                status_code=413,
                content={"error": PayloadTooLargeError.public_message},
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self._max_bytes:
                    raise PayloadTooLargeError()
            return message

        await self.app(scope, limited_receive, send)


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turns unexpected exceptions into a generic 500.

    Installed innermost so CORS and security headers still wrap the response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Server error on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=500,
                content={"error": "Internal server error"},
            )
