"""Pydantic schemas for upload responses."""

from datetime import datetime

from pydantic import BaseModel

from .upload_models import FileVerdict, UploadBatchResult


class FileVerdictSchema(BaseModel):
    file_name: str
    mimetype: str
    size_in_mb: float
    accepted: bool
    created_at: datetime | None
    creation_source: str | None
    camera_make: str | None = None
    camera_model: str | None = None
    iso: str | None = None
    quality_score: float | None = None
    time_offset: int | None = None
    message: str
    errors: list[str]
    warnings: list[str]

    @classmethod
    def from_domain(cls, verdict: FileVerdict) -> "FileVerdictSchema":
        metadata = verdict.metadata
        details = verdict.time_validation.details
        return cls(
            file_name=metadata.original_name,
            mimetype=metadata.mimetype,
            size_in_mb=round(metadata.size_in_mb, 2),
            accepted=verdict.accepted,
            created_at=metadata.created_at,
            creation_source=(
                details.creation_source.value if details.creation_source else None
            ),
            camera_make=metadata.camera_make,
            camera_model=metadata.camera_model,
            iso=metadata.iso,
            quality_score=metadata.quality_score,
            time_offset=details.time_offset,
            message=details.message,
            errors=verdict.reasons,
            warnings=list(metadata.validation_warnings),
        )


class UploadBatchSchema(BaseModel):
    status: str
    event_id: str
    files: list[FileVerdictSchema]

    @classmethod
    def from_domain(cls, result: UploadBatchResult) -> "UploadBatchSchema":
        return cls(
            status="ok" if result.accepted else "error",
            event_id=result.event_id,
            files=[FileVerdictSchema.from_domain(verdict) for verdict in result.verdicts],
        )
