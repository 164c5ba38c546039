from pathlib import Path
from typing import Literal

from fastapi import Request
from pydantic_settings import BaseSettings, SettingsConfigDict


# ──────────────────────────────────────────────
# Settings (from environment variables / .env)
# ──────────────────────────────────────────────
class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 3001
    public_base_url: str | None = None

    # CORS settings
    cors_origins: str = "*"
    cors_allow_credentials: bool = False
    cors_allow_methods: str = "*"
    cors_allow_headers: str = "*"

    # Upload settings
    upload_dir: Path = Path("uploads")
    max_upload_size: int = 10 * 1024 * 1024  # 10 MB

    # Application settings
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
        if self.cors_allow_methods == "*":
            return ["*"]
        return [method.strip() for method in self.cors_allow_methods.split(",")]

    @property
    def cors_headers_list(self) -> list[str]:
        """Parse CORS headers from comma-separated string."""
        if self.cors_allow_headers == "*":
            return ["*"]
        return [header.strip() for header in self.cors_allow_headers.split(",")]

    @property
    def upload_path(self) -> Path:
        """Absolute storage directory (relative values resolve against the CWD)."""
        return self.upload_dir.resolve()

    @property
    def base_url(self) -> str:
        """
        Base used for every URL handed back to clients.

        Falls back to ``http://localhost:<port>`` which is only correct when
        clients reach the service directly; set ``PUBLIC_BASE_URL`` when it
        runs behind a proxy or on another host.
        """
        if self.public_base_url:
            return self.public_base_url.rstrip("/")
        return f"http://localhost:{self.port}"

    @property
    def max_upload_size_label(self) -> str:
        """``10MB`` for whole mebibyte limits, the exact byte count otherwise."""
        mib, remainder = divmod(self.max_upload_size, 1024 * 1024)
        if mib and not remainder:
            return f"{mib}MB"
        return f"{self.max_upload_size} bytes"


def get_settings(request: Request) -> Settings:
    """FastAPI dependency – the settings the running app was created with."""
    return request.app.state.settings


# ──────────────────────────────────────────────
# Paths
# ──────────────────────────────────────────────
STATIC_DIR = Path(__file__).resolve().parent / "static"
INDEX_HTML = STATIC_DIR / "index.html"

# ──────────────────────────────────────────────
# Image filtering (fixed – not configurable)
# ──────────────────────────────────────────────
IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"}
)
IMAGE_MIME_PREFIX = "image/"
UPLOAD_FIELD_NAME = "image"
