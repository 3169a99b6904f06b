"""Middleware – CORS headers and last-resort error handling."""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.catbox_relay.errors import UploadFailedError

logger = logging.getLogger(__name__)


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp CORS headers on every response and answer every preflight.

    Unlike Starlette's ``CORSMiddleware`` the headers do not depend on the
    request carrying an ``Origin``; any ``OPTIONS`` request gets an empty
    200 whatever its path.
    """

    def __init__(
        self,
        app,
        allow_origins: list[str],
        allow_methods: list[str],
        allow_headers: list[str],
    ):
        super().__init__(app)
        self.allow_origins = allow_origins
        self.allow_methods = ", ".join(allow_methods)
        self.allow_headers = ", ".join(allow_headers)

    def _allow_origin(self, request: Request) -> str:
        if "*" in self.allow_origins:
            return "*"
        origin = request.headers.get("origin")
        if origin in self.allow_origins:
            return origin
        return self.allow_origins[0]

    def _cors_headers(self, request: Request) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self._allow_origin(request),
            "Access-Control-Allow-Methods": self.allow_methods,
            "Access-Control-Allow-Headers": self.allow_headers,
        }

    async def dispatch(self, request, call_next):
        if request.method == "OPTIONS":
            headers = self._cors_headers(request)
            headers["Content-Type"] = "application/json"
            return Response(status_code=200, headers=headers)

        response: Response = await call_next(request)
        response.headers.update(self._cors_headers(request))
        return response


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "%s on %s (500): %s", type(exc).__name__, request.url.path, exc,
                exc_info=True,
            )
            if request.url.path.startswith("/upload"):
                content = UploadFailedError(str(exc)).to_content()
            else:
                content = {"error": "Internal server error", "message": str(exc)}
            return JSONResponse(status_code=500, content=content)
