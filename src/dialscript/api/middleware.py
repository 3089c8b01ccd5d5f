"""Middleware: request timing and body size limits."""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

_SCRIPT_PATHS = ("/scripts/validate", "/scripts/fix")
_MAX_BODY_SCRIPT = 5 * 1024 * 1024  # 5 MB for script validate/fix
_MAX_BODY_DEFAULT = 1 * 1024 * 1024  # 1 MB for everything else


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """Add X-Request-Duration header with processing time."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-Duration-Ms"] = f"{duration_ms:.1f}"
        return response


class RequestBodyLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies that exceed size limits.

    Script endpoints allow up to ``script_limit`` bytes (5 MB unless
    configured); all other endpoints are capped at 1 MB.

    Two checks are performed:
    1. **Content-Length header**: cheap early rejection.
    2. **Streaming byte count**: reads the body via ``request.stream()``
       and aborts as soon as the limit is exceeded, avoiding buffering an
       arbitrarily large payload into memory.  The consumed bytes are
       cached on ``request._body`` so downstream handlers can still use
       ``await request.body()``.
    """

    def __init__(self, app: ASGIApp, script_limit: int = _MAX_BODY_SCRIPT) -> None:
        super().__init__(app)
        self.script_limit = script_limit

    def _limit_for(self, path: str) -> int:
        return self.script_limit if path.endswith(_SCRIPT_PATHS) else _MAX_BODY_DEFAULT

    @staticmethod
    def _too_large(limit: int) -> JSONResponse:
        return JSONResponse(
            status_code=413,
            content={"detail": f"Request body too large (max {limit:,} bytes)"},
        )

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        limit = self._limit_for(request.url.path)

        # Fast path: check Content-Length header first
        content_length = request.headers.get("content-length")
        if content_length is not None and content_length.isdigit() and int(content_length) > limit:
            return self._too_large(limit)

        # Stream actual bytes and abort early if limit exceeded
        if request.method in ("POST", "PUT", "PATCH"):
            chunks: list[bytes] = []
            total = 0
            async for chunk in request.stream():
                total += len(chunk)
                if total > limit:
                    return self._too_large(limit)
                chunks.append(chunk)
            # Cache consumed body so downstream can call request.body()
            request._body = b"".join(chunks)  # noqa: SLF001

        return await call_next(request)
