from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # CORS settings
    cors_origins: str = "*"
    cors_allow_methods: str = "GET,POST,OPTIONS"
    cors_allow_headers: str = "Content-Type"

    # Upload settings
    max_file_size_mb: int = 200

    # Upstream hosts
    catbox_api_url: str = "https://catbox.moe/user/api.php"
    litterbox_api_url: str = "https://litterbox.catbox.moe/resources/internals/api.php"
    http_timeout: float = 300.0
    user_agent: str = "catbox-relay/1.0"

    # Application settings
    service_name: str = "catbox-uploader-worker"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def cors_methods_list(self) -> list[str]:
        """Parse CORS methods from comma-separated string."""
        return [method.strip() for method in self.cors_allow_methods.split(",")]

    @property
    def cors_headers_list(self) -> list[str]:
        """Parse CORS headers from comma-separated string."""
        return [header.strip() for header in self.cors_allow_headers.split(",")]

    @property
    def max_file_size_label(self) -> str:
        return f"{self.max_file_size_mb}MB"


# Global settings instance
settings = Settings()

# ──────────────────────────────────────────────
# Upload constants
# ──────────────────────────────────────────────
BYTES_PER_MB = 1024 * 1024
UPLOAD_REQTYPE = "fileupload"
DEFAULT_FILENAME = "download"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# litterbox only accepts these retention periods
TEMP_DURATIONS: tuple[str, ...] = ("1h", "12h", "24h", "72h")
DEFAULT_TEMP_DURATION = "1h"
