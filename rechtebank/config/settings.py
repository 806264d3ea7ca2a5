"""Client configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from rechtebank import __version__

MAX_PHOTO_BYTES = 10 * 1024 * 1024


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Settings shared by the photo pipeline and the judge API client."""

    environment: str = "dev"
    log_level: str = "INFO"

    api_base_url: str = "http://localhost:8080"
    user_agent: str = f"rechtebank-client/{__version__}"

    max_attempts: int = 3
    retry_delay: float = 1.0
    request_timeout: float = 30.0
    max_photo_bytes: int = MAX_PHOTO_BYTES

    jpeg_quality: float = 0.9


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        api_base_url=os.getenv("RECHTEBANK_API_URL", "http://localhost:8080"),
        user_agent=os.getenv("RECHTEBANK_USER_AGENT", f"rechtebank-client/{__version__}"),
        max_attempts=int(os.getenv("RECHTEBANK_MAX_ATTEMPTS", "3")),
        retry_delay=float(os.getenv("RECHTEBANK_RETRY_DELAY", "1.0")),
        request_timeout=float(os.getenv("RECHTEBANK_REQUEST_TIMEOUT", "30")),
        max_photo_bytes=int(os.getenv("RECHTEBANK_MAX_PHOTO_BYTES", str(MAX_PHOTO_BYTES))),
        jpeg_quality=float(os.getenv("RECHTEBANK_JPEG_QUALITY", "0.9")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
