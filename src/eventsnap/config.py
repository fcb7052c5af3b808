"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Sequence


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    """Rules applied to every uploaded photo.

    ``min_image_width``/``min_image_height`` are only enforced when
    ``enforce_min_dimensions`` is set; ``min_quality_score`` is informational.
    """

    max_file_size_mb: float = 10
    min_image_width: int = 800
    min_image_height: int = 600
    time_buffer_minutes: int = 60
    allowed_mime_types: tuple[str, ...] = (
        "image/jpeg",
        "image/png",
        "image/heic",
        "image/heif",
    )
    require_original_photo: bool = False
    min_quality_score: float = 0.5
    clock_skew_minutes: int = 0
    metadata_timeout_seconds: float = 5.0
    enforce_min_dimensions: bool = False


DEFAULT_VALIDATION_CONFIG = ValidationConfig()


@dataclass(slots=True)
class UploadLimits:
    absolute_cap_bytes: int
    chunk_size_bytes: int


@dataclass(slots=True)
class AppConfig:
    validation: ValidationConfig = DEFAULT_VALIDATION_CONFIG
    upload_limits: UploadLimits = field(
        default_factory=lambda: UploadLimits(
            absolute_cap_bytes=50 * 1024 * 1024,
            chunk_size_bytes=1024 * 1024,
        )
    )
    title: str = "EventSnap"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _env_mime_types(name: str, default: Sequence[str]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return tuple(default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def load_validation_config() -> ValidationConfig:
    """Build :class:`ValidationConfig` from ``EVENTSNAP_*`` variables."""
    defaults = DEFAULT_VALIDATION_CONFIG
    return ValidationConfig(
        max_file_size_mb=float(
            os.getenv("EVENTSNAP_MAX_FILE_SIZE_MB", defaults.max_file_size_mb)
        ),
        min_image_width=int(os.getenv("EVENTSNAP_MIN_IMAGE_WIDTH", defaults.min_image_width)),
        min_image_height=int(
            os.getenv("EVENTSNAP_MIN_IMAGE_HEIGHT", defaults.min_image_height)
        ),
        time_buffer_minutes=int(
            os.getenv("EVENTSNAP_TIME_BUFFER_MINUTES", defaults.time_buffer_minutes)
        ),
        allowed_mime_types=_env_mime_types(
            "EVENTSNAP_ALLOWED_MIME_TYPES", defaults.allowed_mime_types
        ),
        require_original_photo=_env_bool(
            "EVENTSNAP_REQUIRE_ORIGINAL_PHOTO", defaults.require_original_photo
        ),
        min_quality_score=float(
            os.getenv("EVENTSNAP_MIN_QUALITY_SCORE", defaults.min_quality_score)
        ),
        clock_skew_minutes=int(
            os.getenv("EVENTSNAP_CLOCK_SKEW_MINUTES", defaults.clock_skew_minutes)
        ),
        metadata_timeout_seconds=float(
            os.getenv(
                "EVENTSNAP_METADATA_TIMEOUT_SECONDS", defaults.metadata_timeout_seconds
            )
        ),
        enforce_min_dimensions=_env_bool(
            "EVENTSNAP_ENFORCE_MIN_DIMENSIONS", defaults.enforce_min_dimensions
        ),
    )


def load_config() -> AppConfig:
    """Load configuration from environment."""
    upload_limits = UploadLimits(
        absolute_cap_bytes=int(os.getenv("EVENTSNAP_ABSOLUTE_CAP_BYTES", 50 * 1024 * 1024)),
        chunk_size_bytes=int(os.getenv("EVENTSNAP_CHUNK_SIZE_BYTES", 1024 * 1024)),
    )
    return AppConfig(
        validation=load_validation_config(),
        upload_limits=upload_limits,
        title=os.getenv("EVENTSNAP_TITLE", "EventSnap"),
    )
