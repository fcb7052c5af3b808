"""Metadata extraction for uploaded photos.

The creation timestamp of a file is inferred from the strongest signal that is
available: embedded EXIF tags first, then the filesystem modification time the
client reported, and finally the server clock. Every weaker fallback leaves a
finding on the returned :class:`FileMetadata` so callers can apply policy.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from io import BytesIO

import pillow_heif
from PIL import ExifTags, Image

from ..config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from .upload_errors import ExifReadError, InvalidFileError
from .upload_models import CreationSource, FileMetadata, ImageDimensions, RawFile

logger = logging.getLogger(__name__)

pillow_heif.register_heif_opener()

BYTES_PER_MB = 1024 * 1024

EXIF_DATE_FIELDS = ("DateTimeOriginal", "CreateDate", "ModifyDate", "DateTime")

_TAG_ALIASES = {
    "DateTimeDigitized": "CreateDate",
    "ISOSpeedRatings": "ISO",
    "PhotographicSensitivity": "ISO",
}
_EXIF_DATETIME_FORMATS = ("%Y:%m:%d %H:%M:%S", "%Y:%m:%d %H:%M:%S%z")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

NO_EXIF_WARNING = "No EXIF data found"
EXIF_TIMEOUT_WARNING = "Timed out reading EXIF data"
CURRENT_TIME_WARNING = (
    "Using current time as creation time - this may not reflect when the photo "
    "was actually taken"
)
UNVERIFIED_ORIGINAL_ERROR = (
    "Could not verify original photo creation time. Please upload original photos "
    "directly from your camera/phone."
)


class ExifTimeoutError(ExifReadError):
    """Raised when EXIF parsing does not finish within the configured bound."""


@dataclass(frozen=True, slots=True)
class EmbeddedMetadata:
    """Tags and geometry read from the image container."""

    tags: Mapping[str, str] = field(default_factory=dict)
    dimensions: ImageDimensions | None = None


MetadataLoader = Callable[[bytes], EmbeddedMetadata]
Clock = Callable[[], datetime]


def _describe(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("ascii", errors="ignore").strip("\x00 ")
    if isinstance(value, tuple):
        return ", ".join(_describe(item) for item in value)
    return str(value).strip("\x00 ")


def read_embedded_metadata(data: bytes) -> EmbeddedMetadata:
    """Read EXIF tags (IFD0 and the Exif sub-IFD) and dimensions with Pillow."""
    try:
        with Image.open(BytesIO(data)) as image:
            width, height = image.size
            exif = image.getexif()
            entries = list(exif.items())
            entries.extend(exif.get_ifd(ExifTags.IFD.Exif).items())
    except Exception as exc:
        raise ExifReadError(str(exc)) from exc

    tags: dict[str, str] = {}
    for tag_id, value in entries:
        name = ExifTags.TAGS.get(tag_id)
        if name is None or isinstance(value, dict):
            continue
        tags[name] = _describe(value)
        alias = _TAG_ALIASES.get(name)
        if alias is not None:
            tags.setdefault(alias, tags[name])
    if "DateTime" in tags:
        tags.setdefault("ModifyDate", tags["DateTime"])
    return EmbeddedMetadata(tags=tags, dimensions=ImageDimensions(width, height))


def parse_exif_datetime(description: str | None) -> datetime | None:
    """Parse an EXIF ``YYYY:MM:DD HH:MM:SS`` or ISO-8601 description."""
    if not description:
        return None
    text = description.strip()
    for fmt in _EXIF_DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _exif_created_at(tags: Mapping[str, str]) -> datetime | None:
    for field_name in EXIF_DATE_FIELDS:
        parsed = parse_exif_datetime(tags.get(field_name))
        if parsed is not None:
            return parsed
    return None


def _quality_score(tags: Mapping[str, str]) -> float | None:
    # Only loaders that surface a vendor "Quality" value fill this; standard
    # EXIF has no such tag, so Pillow-read files report None.
    match = _LEADING_INT.match(tags.get("Quality", ""))
    if match is None:
        return None
    return int(match.group(1)) / 100


def _require_fields(file: RawFile | None) -> RawFile:
    if file is None:
        raise InvalidFileError("Missing required parameter - file")
    if not file.name or not file.mimetype or not file.size or not file.data:
        raise InvalidFileError("Invalid file object - missing required properties")
    return file


def _creation_time_candidates(
    file: RawFile,
    tags: Mapping[str, str],
    clock: Clock,
) -> tuple[tuple[CreationSource, Callable[[], datetime | None]], ...]:
    return (
        (CreationSource.EXIF, lambda: _exif_created_at(tags)),
        (CreationSource.LAST_MODIFIED, lambda: file.last_modified_date),
        (CreationSource.CURRENT, clock),
    )


def _apply_embedded(
    metadata: FileMetadata,
    embedded: EmbeddedMetadata,
    config: ValidationConfig,
) -> None:
    tags = embedded.tags
    metadata.dimensions = embedded.dimensions
    metadata.quality_score = _quality_score(tags)
    metadata.camera_make = tags.get("Make") or None
    metadata.camera_model = tags.get("Model") or None
    metadata.iso = tags.get("ISO") or None

    dimensions = embedded.dimensions
    if config.enforce_min_dimensions and dimensions is not None:
        if (
            dimensions.width < config.min_image_width
            or dimensions.height < config.min_image_height
        ):
            metadata.validation_errors.append(
                f"Image dimensions ({dimensions.width}x{dimensions.height}) are below "
                f"minimum required ({config.min_image_width}x{config.min_image_height})"
            )


def extract_file_metadata(
    file: RawFile | None,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
    *,
    metadata_loader: MetadataLoader = read_embedded_metadata,
    clock: Clock = datetime.now,
) -> FileMetadata:
    """Describe ``file`` and infer when it was created.

    Raises :class:`InvalidFileError` for missing input; every other problem is
    recorded in ``validation_errors`` or ``validation_warnings``.
    """
    file = _require_fields(file)

    metadata = FileMetadata(
        original_name=file.name,
        mimetype=file.mimetype,
        size=file.size,
        size_in_mb=file.size / BYTES_PER_MB,
    )

    if metadata.size_in_mb > config.max_file_size_mb:
        metadata.validation_errors.append(
            f"File size ({metadata.size_in_mb:.2f}MB) exceeds maximum allowed size "
            f"of {config.max_file_size_mb:g}MB"
        )

    if metadata.mimetype not in config.allowed_mime_types:
        metadata.validation_errors.append(
            f"File type {metadata.mimetype} is not allowed. "
            f"Allowed types: {', '.join(config.allowed_mime_types)}"
        )

    tags: Mapping[str, str] = {}
    if metadata.mimetype.startswith("image/"):
        try:
            embedded = metadata_loader(file.data)
        except ExifTimeoutError:
            logger.warning(
                "uploads.metadata.exif_timeout",
                extra={"upload_name": metadata.original_name},
            )
            metadata.validation_warnings.append(EXIF_TIMEOUT_WARNING)
        except ExifReadError as exc:
            logger.debug(
                "uploads.metadata.exif_unreadable",
                extra={"upload_name": metadata.original_name, "error": str(exc)},
            )
            metadata.validation_warnings.append(NO_EXIF_WARNING)
        else:
            _apply_embedded(metadata, embedded, config)
            tags = embedded.tags
            if not tags:
                metadata.validation_warnings.append(NO_EXIF_WARNING)

    for source, resolve in _creation_time_candidates(file, tags, clock):
        created_at = resolve()
        if created_at is not None:
            metadata.created_at = created_at
            metadata.possible_creation_sources.append(source)
            break

    if metadata.possible_creation_sources[-1] is CreationSource.CURRENT:
        if config.require_original_photo:
            metadata.validation_errors.append(UNVERIFIED_ORIGINAL_ERROR)
        else:
            metadata.validation_warnings.append(CURRENT_TIME_WARNING)

    logger.info(
        "uploads.metadata.extracted",
        extra={
            "upload_name": metadata.original_name,
            "size_bytes": metadata.size,
            "content_type": metadata.mimetype,
            "creation_source": metadata.possible_creation_sources[-1].value,
            "errors": len(metadata.validation_errors),
            "warnings": len(metadata.validation_warnings),
        },
    )
    return metadata


async def extract_file_metadata_bounded(
    file: RawFile | None,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
    *,
    metadata_loader: MetadataLoader = read_embedded_metadata,
    clock: Clock = datetime.now,
) -> FileMetadata:
    """Run :func:`extract_file_metadata` with EXIF parsing off the event loop.

    Parsing is bounded by ``config.metadata_timeout_seconds``; a file that takes
    longer is treated as carrying no usable EXIF data.
    """
    file = _require_fields(file)

    if not file.mimetype.startswith("image/"):
        return extract_file_metadata(
            file, config, metadata_loader=metadata_loader, clock=clock
        )

    embedded: EmbeddedMetadata | None = None
    failure: ExifReadError | None = None
    try:
        embedded = await asyncio.wait_for(
            asyncio.to_thread(metadata_loader, file.data),
            timeout=config.metadata_timeout_seconds,
        )
    except TimeoutError:
        failure = ExifTimeoutError(
            f"EXIF parsing exceeded {config.metadata_timeout_seconds}s"
        )
    except ExifReadError as exc:
        failure = exc

    def preloaded(_data: bytes) -> EmbeddedMetadata:
        if embedded is None:
            raise failure or ExifReadError("EXIF data was not loaded")
        return embedded

    return extract_file_metadata(file, config, metadata_loader=preloaded, clock=clock)


__all__ = [
    "EXIF_DATE_FIELDS",
    "EmbeddedMetadata",
    "ExifTimeoutError",
    "extract_file_metadata",
    "extract_file_metadata_bounded",
    "parse_exif_datetime",
    "read_embedded_metadata",
]
