"""Data structures for the upload pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class CreationSource(StrEnum):
    """Provenance of an inferred creation timestamp, strongest first."""

    EXIF = "EXIF"
    LAST_MODIFIED = "lastModifiedDate"
    CURRENT = "current"


@dataclass(slots=True)
class RawFile:
    """Untrusted uploaded file as handed over by the transport layer."""

    name: str | None
    mimetype: str | None
    size: int | None
    data: bytes | None
    last_modified_date: datetime | None = None


@dataclass(frozen=True, slots=True)
class ImageDimensions:
    width: int
    height: int


@dataclass(slots=True)
class FileMetadata:
    """Outcome of inspecting an uploaded file."""

    original_name: str
    mimetype: str
    size: int
    size_in_mb: float
    dimensions: ImageDimensions | None = None
    quality_score: float | None = None
    possible_creation_sources: list[CreationSource] = field(default_factory=list)
    created_at: datetime | None = None
    camera_make: str | None = None
    camera_model: str | None = None
    iso: str | None = None
    validation_errors: list[str] = field(default_factory=list)
    validation_warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors


@dataclass(frozen=True, slots=True)
class TimeValidationDetails:
    file_created_at: str
    event_start: str
    event_end: str
    creation_source: CreationSource | None
    time_offset: int | None
    direction: str | None
    message: str


@dataclass(frozen=True, slots=True)
class TimeValidationResult:
    """Verdict on whether a file was captured inside the event window."""

    is_valid: bool
    created_at: datetime
    details: TimeValidationDetails


@dataclass(frozen=True, slots=True)
class FileVerdict:
    """Combined admission decision for one file of a batch."""

    metadata: FileMetadata
    time_validation: TimeValidationResult

    @property
    def accepted(self) -> bool:
        return self.metadata.is_valid and self.time_validation.is_valid

    @property
    def reasons(self) -> list[str]:
        reasons = list(self.metadata.validation_errors)
        if not self.time_validation.is_valid:
            reasons.append(self.time_validation.details.message)
        return reasons


@dataclass(frozen=True, slots=True)
class UploadBatchResult:
    event_id: str
    verdicts: tuple[FileVerdict, ...]

    @property
    def accepted(self) -> bool:
        return bool(self.verdicts) and all(verdict.accepted for verdict in self.verdicts)
