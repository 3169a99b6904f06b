from pydantic import BaseModel


class ServiceLimits(BaseModel):
    max_file_size: str
    allowed_methods: list[str]
    temp_durations: list[str]


class ServiceInfo(BaseModel):
    """Response schema for GET /."""
    message: str
    endpoints: dict[str, str]
    limits: ServiceLimits


class HealthResponse(BaseModel):
    """Response schema for GET /health."""
    status: str
    service: str
    timestamp: str
