"""Router – service description and health check."""

from datetime import datetime, timezone

from fastapi import APIRouter

from src.catbox_relay.config import TEMP_DURATIONS, settings
from src.catbox_relay.schemas.info import HealthResponse, ServiceInfo, ServiceLimits

router = APIRouter(tags=["Info"])


@router.get("/", response_model=ServiceInfo)
def root_info() -> ServiceInfo:
    """Describe the available endpoints and upload limits."""
    return ServiceInfo(
        message="Catbox Uploader API",
        endpoints={
            "/upload": "Upload file to catbox.moe (permanent)",
            "/upload/temp": "Upload file to litterbox (temporary)",
            "/upload/url": "Upload file from URL",
            "/health": "Check API status",
        },
        limits=ServiceLimits(
            max_file_size=settings.max_file_size_label,
            allowed_methods=["POST"],
            temp_durations=list(TEMP_DURATIONS),
        ),
    )


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Liveness probe."""
    now = datetime.now(timezone.utc)
    return HealthResponse(
        status="ok",
        service=settings.service_name,
        timestamp=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )
