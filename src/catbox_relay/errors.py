"""Error types and their JSON renderings.

Every error body is a JSON object carrying an ``error`` key; the
subclasses below add the extra fields each failure reports back to the
caller.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.catbox_relay.config import TEMP_DURATIONS, settings

logger = logging.getLogger(__name__)

_HTTP_ERROR_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


class RelayError(Exception):
    """A request that ends with a JSON error envelope."""

    def __init__(self, error: str, status_code: int = 400, **extra: Any) -> None:
        super().__init__(error)
        self.error = error
        self.status_code = status_code
        self.extra = extra

    def to_content(self) -> dict[str, Any]:
        return {"error": self.error, **self.extra}


class FileTooLargeError(RelayError):
    def __init__(self, file_size: str) -> None:
        super().__init__(
            "File too large",
            status_code=413,
            max_size=settings.max_file_size_label,
            file_size=file_size,
        )


class InvalidDurationError(RelayError):
    def __init__(self, provided: Any) -> None:
        super().__init__(
            "Invalid time parameter",
            valid_times=list(TEMP_DURATIONS),
            provided=provided,
        )


class DownloadFailedError(RelayError):
    """The source URL answered with a non-2xx status."""

    def __init__(self, status: int) -> None:
        super().__init__("Failed to download file", status=status)


class UploadFailedError(RelayError):
    """The upstream host rejected the file or could not be reached."""

    def __init__(self, message: str) -> None:
        super().__init__("Upload failed", status_code=500)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_content(self) -> dict[str, Any]:
        return {"success": False, "error": self.error, "message": self.message}


# ──────────────────────────────────────────────
# Exception handlers
# ──────────────────────────────────────────────
async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.warning(
            "%s %s rejected (%d): %s",
            request.method, request.url.path, exc.status_code, exc.error,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = _HTTP_ERROR_MESSAGES.get(exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("%s %s rejected: malformed request body", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
