"""Service layer – validation helpers and the two outbound calls.

* ``download_file`` fetches a caller-supplied URL fully into memory.
* ``upload_file`` relays bytes to **catbox** (permanent) or **litterbox**
  (temporary, when a retention ``duration`` is given).

Both upstreams answer a multipart POST with the file URL as bare text;
anything else is reported as an ``UploadFailedError``.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated
from urllib.parse import urlsplit

import httpx
from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError

from src.catbox_relay.config import (
    BYTES_PER_MB,
    DEFAULT_CONTENT_TYPE,
    DEFAULT_FILENAME,
    TEMP_DURATIONS,
    UPLOAD_REQTYPE,
    settings,
)
from src.catbox_relay.errors import (
    DownloadFailedError,
    FileTooLargeError,
    InvalidDurationError,
    RelayError,
    UploadFailedError,
)

logger = logging.getLogger(__name__)

# AnyUrl has no max_length (HttpUrl stops at 2083 chars)
_http_url = TypeAdapter(Annotated[AnyUrl, UrlConstraints(allowed_schemes=["http", "https"])])


@dataclass
class RemoteFile:
    """A file downloaded from a source URL."""
    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


# ──────────────────────────────────────────────
# Validation helpers
# ──────────────────────────────────────────────
def size_in_mb(size: int) -> float:
    return size / BYTES_PER_MB


def round_mb(size_mb: float) -> float:
    """Round to two decimals, halves away from zero (0.125 -> 0.13)."""
    return float(Decimal(size_mb).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def ensure_within_limit(size: int) -> float:
    """Return *size* in MiB, raising ``FileTooLargeError`` past the ceiling."""
    size_mb = size_in_mb(size)
    if size_mb > settings.max_file_size_mb:
        raise FileTooLargeError(f"{round_mb(size_mb):.2f}MB")
    return size_mb


def validate_duration(value: str) -> str:
    if value not in TEMP_DURATIONS:
        raise InvalidDurationError(value)
    return value


def parse_source_url(value: str) -> str:
    """Check that *value* is an absolute http(s) URL and return it unchanged."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise RelayError("Invalid URL") from None
    return value


def filename_from_url(url: str) -> str:
    """Last path segment of *url*, or ``DEFAULT_FILENAME`` when it is empty."""
    return posixpath.basename(urlsplit(url).path) or DEFAULT_FILENAME


# ──────────────────────────────────────────────
# Outbound calls
# ──────────────────────────────────────────────
async def download_file(client: httpx.AsyncClient, url: str) -> RemoteFile:
    """GET *url* and return its body with the derived filename."""
    logger.info("Fetching source file %s …", url)
    try:
        response = await client.get(url)
    except httpx.HTTPError as exc:
        raise UploadFailedError(str(exc) or type(exc).__name__) from exc

    if not response.is_success:
        logger.warning("Source %s answered %d", url, response.status_code)
        raise DownloadFailedError(response.status_code)

    return RemoteFile(
        filename=filename_from_url(url),
        content=response.content,
        content_type=response.headers.get("content-type", DEFAULT_CONTENT_TYPE),
    )


async def upload_file(
    client: httpx.AsyncClient,
    filename: str,
    content: bytes,
    content_type: str | None = None,
    duration: str | None = None,
) -> str:
    """Relay a file upstream and return the URL it is now served from.

    With a *duration* the file goes to litterbox and expires after that
    period; without one it is stored permanently on catbox.
    """
    if duration is None:
        host, api_url = "catbox", settings.catbox_api_url
        data = {"reqtype": UPLOAD_REQTYPE}
    else:
        host, api_url = "litterbox", settings.litterbox_api_url
        data = {"reqtype": UPLOAD_REQTYPE, "time": duration}

    files = {"fileToUpload": (filename, content, content_type or DEFAULT_CONTENT_TYPE)}

    logger.info("Uploading %s (%d bytes) to %s …", filename, len(content), host)
    try:
        response = await client.post(api_url, data=data, files=files)
    except httpx.HTTPError as exc:
        raise UploadFailedError(str(exc) or type(exc).__name__) from exc

    if not response.is_success:
        raise UploadFailedError(f"Upload failed with status {response.status_code}")

    result = response.text
    if not result.startswith("https://"):
        raise UploadFailedError(f"Invalid response from {host}")

    url = result.strip()
    logger.info("✅ Uploaded %s → %s", filename, url)
    return url
