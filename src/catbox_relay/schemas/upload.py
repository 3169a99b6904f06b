from pydantic import BaseModel

from src.catbox_relay.config import DEFAULT_TEMP_DURATION


class UploadResponse(BaseModel):
    """Response schema for the /upload family of endpoints."""
    success: bool = True
    url: str
    filename: str
    size_mb: float
    original_url: str | None = None
    expiration: str | None = None
    temporary: bool | None = None


class UrlUploadRequest(BaseModel):
    """Body schema for POST /upload/url."""
    url: str | None = None
    temporary: bool = False
    time: str = DEFAULT_TEMP_DURATION
