"""Router – file upload relays (direct, temporary and from a URL)."""

import logging

import httpx
from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.catbox_relay.config import DEFAULT_TEMP_DURATION
from src.catbox_relay.dependencies import get_http_client
from src.catbox_relay.errors import RelayError
from src.catbox_relay.schemas.upload import UploadResponse, UrlUploadRequest
from src.catbox_relay.services import catbox_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Upload"])


async def _read_upload(file: UploadFile | None) -> tuple[bytes, float]:
    """Return the uploaded bytes and their size in MiB, enforcing the ceiling."""
    if file is None:
        raise RelayError("No file provided")

    if file.size is not None:
        catbox_service.ensure_within_limit(file.size)

    content = await file.read()
    return content, catbox_service.ensure_within_limit(len(content))


@router.post("/upload", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_file(
    file: UploadFile | None = File(None),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> UploadResponse:
    """
    Upload a file to catbox.moe for permanent storage.

    Parameters
    ----------
    file : UploadFile – any file up to the configured size ceiling.

    Returns
    -------
    UploadResponse with:
        - url      : catbox URL the file is served from
        - filename : original filename
        - size_mb  : file size in MiB, two decimals
    """
    content, size_mb = await _read_upload(file)

    url = await catbox_service.upload_file(
        client, file.filename, content, file.content_type,
    )

    return UploadResponse(
        url=url,
        filename=file.filename,
        size_mb=catbox_service.round_mb(size_mb),
    )


@router.post("/upload/temp", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_temp_file(
    file: UploadFile | None = File(None),
    time: str | None = Form(None),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> UploadResponse:
    """
    Upload a file to litterbox; it expires after ``time`` (1h, 12h, 24h or 72h).
    """
    if file is None:
        raise RelayError("No file provided")

    duration = catbox_service.validate_duration(time or DEFAULT_TEMP_DURATION)
    content, size_mb = await _read_upload(file)

    url = await catbox_service.upload_file(
        client, file.filename, content, file.content_type, duration=duration,
    )

    return UploadResponse(
        url=url,
        filename=file.filename,
        size_mb=catbox_service.round_mb(size_mb),
        expiration=duration,
        temporary=True,
    )


@router.post("/upload/url", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_from_url(
    body: UrlUploadRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> UploadResponse:
    """
    Download a file from ``body.url`` and relay it to catbox, or to
    litterbox when ``body.temporary`` is set.
    """
    if not body.url:
        raise RelayError("No URL provided")

    source_url = catbox_service.parse_source_url(body.url)
    duration = catbox_service.validate_duration(body.time) if body.temporary else None

    remote = await catbox_service.download_file(client, source_url)
    size_mb = catbox_service.ensure_within_limit(remote.size)

    url = await catbox_service.upload_file(
        client, remote.filename, remote.content, remote.content_type, duration=duration,
    )

    return UploadResponse(
        url=url,
        original_url=source_url,
        filename=remote.filename,
        size_mb=catbox_service.round_mb(size_mb),
        expiration=duration,
        temporary=True if body.temporary else None,
    )
