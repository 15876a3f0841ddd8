"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


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
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    photos_root: str = "frontend/photos"
    photos_base_url: str = ""
    image_folder: str = "photos"
    placeholder_path: str = "photos/placeholder.svg"

    brands_api_url: str = ""
    photos_index_url: str = ""

    probe_batch_size: int = 10
    request_timeout: float = 10.0


def _number_env(name: str, default: int | float, cast: type) -> int | float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}") from exc


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        photos_root=os.getenv("PHOTOS_ROOT", "frontend/photos"),
        photos_base_url=os.getenv("PHOTOS_BASE_URL", ""),
        image_folder=os.getenv("IMAGE_FOLDER", "photos"),
        placeholder_path=os.getenv("PLACEHOLDER_PATH", "photos/placeholder.svg"),
        brands_api_url=os.getenv("BRANDS_API_URL", ""),
        photos_index_url=os.getenv("PHOTOS_INDEX_URL", ""),
        probe_batch_size=_number_env("PROBE_BATCH_SIZE", 10, int),
        request_timeout=_number_env("REQUEST_TIMEOUT", 10.0, float),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()
