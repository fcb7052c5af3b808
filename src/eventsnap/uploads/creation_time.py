"""Check that a file was captured inside an event's buffered time window."""

from __future__ import annotations

from datetime import datetime, timedelta

from ..config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from .upload_models import FileMetadata, TimeValidationDetails, TimeValidationResult


def _align(value: datetime, reference: datetime) -> datetime:
    """Give ``value`` the tz-awareness of ``reference`` when they differ.

    Naive values are wall-clock times in the reference zone; aware values
    compared against a naive reference are converted to local time first.
    """
    if value.tzinfo is None and reference.tzinfo is not None:
        return value.replace(tzinfo=reference.tzinfo)
    if value.tzinfo is not None and reference.tzinfo is None:
        return value.astimezone().replace(tzinfo=None)
    return value


def buffered_window(
    event_start: datetime,
    event_end: datetime,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> tuple[datetime, datetime]:
    """Return ``[start - buffer, end + buffer]`` including clock skew tolerance."""
    buffer = timedelta(minutes=config.time_buffer_minutes + config.clock_skew_minutes)
    return event_start - buffer, event_end + buffer


def validate_file_creation_time(
    metadata: FileMetadata,
    event_start: datetime,
    event_end: datetime,
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG,
) -> TimeValidationResult:
    """Decide whether ``metadata.created_at`` falls inside the buffered window.

    Bounds are inclusive. When the timestamp falls outside, ``time_offset`` holds
    the whole minutes past the violated bound.
    """
    if metadata.created_at is None:
        raise ValueError(f"No creation time for '{metadata.original_name}'")
    event_end = _align(event_end, event_start)
    created_at = _align(metadata.created_at, event_start)
    creation_source = (
        metadata.possible_creation_sources[0]
        if metadata.possible_creation_sources
        else None
    )

    window_start, window_end = buffered_window(event_start, event_end, config)
    is_valid = window_start <= created_at <= window_end

    time_offset: int | None = None
    direction: str | None = None
    if created_at < window_start:
        direction = "before"
        time_offset = int((window_start - created_at).total_seconds() // 60)
    elif created_at > window_end:
        direction = "after"
        time_offset = int((created_at - window_end).total_seconds() // 60)

    if is_valid:
        source_label = creation_source.value if creation_source else "unknown"
        message = f"File creation time is valid (detected via {source_label})"
    else:
        message = (
            f"File was created {time_offset} minutes {direction} "
            "the allowed time window"
        )

    return TimeValidationResult(
        is_valid=is_valid,
        created_at=metadata.created_at,
        details=TimeValidationDetails(
            file_created_at=created_at.isoformat(),
            event_start=event_start.isoformat(),
            event_end=event_end.isoformat(),
            creation_source=creation_source,
            time_offset=time_offset,
            direction=direction,
            message=message,
        ),
    )


__all__ = ["buffered_window", "validate_file_creation_time"]
