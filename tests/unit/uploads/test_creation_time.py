from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from src.eventsnap.config import DEFAULT_VALIDATION_CONFIG
from src.eventsnap.uploads.creation_time import (
    buffered_window,
    validate_file_creation_time,
)
from src.eventsnap.uploads.upload_models import CreationSource, FileMetadata

pytestmark = pytest.mark.unit

EVENT_START = datetime(2024, 6, 1, 9, 0)
EVENT_END = datetime(2024, 6, 1, 17, 0)


def metadata_at(
    created_at: datetime, source: CreationSource = CreationSource.EXIF
) -> FileMetadata:
    return FileMetadata(
        original_name="photo.jpg",
        mimetype="image/jpeg",
        size=1024,
        size_in_mb=1024 / (1024 * 1024),
        possible_creation_sources=[source],
        created_at=created_at,
    )


def test_inside_leading_buffer_is_valid() -> None:
    result = validate_file_creation_time(
        metadata_at(datetime(2024, 6, 1, 8, 1)), EVENT_START, EVENT_END
    )

    assert result.is_valid is True
    assert result.details.time_offset is None
    assert result.details.direction is None
    assert result.details.message == "File creation time is valid (detected via EXIF)"


def test_before_buffer_reports_offset_and_direction() -> None:
    result = validate_file_creation_time(
        metadata_at(datetime(2024, 6, 1, 7, 59)), EVENT_START, EVENT_END
    )

    assert result.is_valid is False
    assert result.details.time_offset == 1
    assert result.details.direction == "before"
    assert (
        result.details.message
        == "File was created 1 minutes before the allowed time window"
    )


def test_after_buffer_reports_offset_and_direction() -> None:
    result = validate_file_creation_time(
        metadata_at(datetime(2024, 6, 1, 18, 30, 45)), EVENT_START, EVENT_END
    )

    assert result.is_valid is False
    assert result.details.time_offset == 30
    assert result.details.direction == "after"


@pytest.mark.parametrize(
    "created_at",
    [datetime(2024, 6, 1, 8, 0), datetime(2024, 6, 1, 18, 0)],
)
def test_window_bounds_are_inclusive(created_at: datetime) -> None:
    result = validate_file_creation_time(metadata_at(created_at), EVENT_START, EVENT_END)

    assert result.is_valid is True


def test_details_are_iso_formatted() -> None:
    created_at = datetime(2024, 6, 1, 10, 0)
    result = validate_file_creation_time(
        metadata_at(created_at, CreationSource.LAST_MODIFIED), EVENT_START, EVENT_END
    )

    assert result.created_at == created_at
    assert result.details.file_created_at == "2024-06-01T10:00:00"
    assert result.details.event_start == "2024-06-01T09:00:00"
    assert result.details.event_end == "2024-06-01T17:00:00"
    assert result.details.creation_source == "lastModifiedDate"


def test_clock_skew_widens_the_window() -> None:
    config = replace(DEFAULT_VALIDATION_CONFIG, clock_skew_minutes=5)
    metadata = metadata_at(datetime(2024, 6, 1, 7, 57))

    strict = validate_file_creation_time(metadata, EVENT_START, EVENT_END)
    tolerant = validate_file_creation_time(metadata, EVENT_START, EVENT_END, config)

    assert strict.is_valid is False
    assert tolerant.is_valid is True


def test_zero_buffer_uses_exact_event_bounds() -> None:
    config = replace(DEFAULT_VALIDATION_CONFIG, time_buffer_minutes=0)

    window = buffered_window(EVENT_START, EVENT_END, config)

    assert window == (EVENT_START, EVENT_END)


def test_aware_event_bounds_accept_naive_timestamps() -> None:
    start = EVENT_START.replace(tzinfo=timezone.utc)
    end = EVENT_END.replace(tzinfo=timezone.utc)

    result = validate_file_creation_time(
        metadata_at(datetime(2024, 6, 1, 12, 0)), start, end
    )

    assert result.is_valid is True
    assert result.details.file_created_at == "2024-06-01T12:00:00+00:00"


def test_aware_timestamp_is_compared_in_local_time() -> None:
    created_at = datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)
    local = created_at.astimezone().replace(tzinfo=None)

    inside = validate_file_creation_time(
        metadata_at(created_at), local - timedelta(hours=1), local + timedelta(hours=1)
    )
    outside = validate_file_creation_time(
        metadata_at(created_at), local + timedelta(hours=3), local + timedelta(hours=5)
    )

    assert inside.is_valid is True
    assert inside.details.file_created_at == local.isoformat()
    assert outside.is_valid is False
    assert outside.details.time_offset == 120
    assert outside.details.direction == "before"


def test_missing_creation_time_is_rejected() -> None:
    metadata = metadata_at(EVENT_START)
    metadata.created_at = None

    with pytest.raises(ValueError, match="No creation time"):
        validate_file_creation_time(metadata, EVENT_START, EVENT_END)


def test_validation_is_repeatable() -> None:
    metadata = metadata_at(EVENT_END + timedelta(hours=3))

    first = validate_file_creation_time(metadata, EVENT_START, EVENT_END)
    second = validate_file_creation_time(metadata, EVENT_START, EVENT_END)

    assert first == second
