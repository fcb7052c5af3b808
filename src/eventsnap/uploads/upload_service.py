"""Domain service coordinating photo admission for an event."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

import structlog

from ..config import DEFAULT_VALIDATION_CONFIG, ValidationConfig
from ..events.events_models import Event
from ..events.events_repository import EventRepository
from .creation_time import validate_file_creation_time
from .metadata import MetadataLoader, extract_file_metadata_bounded, read_embedded_metadata
from .upload_errors import EventNotFoundError
from .upload_log import UploadLog
from .upload_models import FileVerdict, RawFile, UploadBatchResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UploadService:
    """Validate upload batches against their event and record accepted ones."""

    event_repo: EventRepository
    upload_log: UploadLog
    config: ValidationConfig = DEFAULT_VALIDATION_CONFIG
    clock: Callable[[], datetime] = datetime.now
    metadata_loader: MetadataLoader = read_embedded_metadata
    log: logging.Logger = field(default_factory=lambda: logger)

    def resolve_event(self, access_token: str) -> Event:
        try:
            return self.event_repo.get_by_token(access_token)
        except KeyError as exc:
            self.log.warning("uploads.event_not_found")
            raise EventNotFoundError(access_token) from exc

    async def check_file(self, file: RawFile, event: Event) -> FileVerdict:
        """Extract metadata for ``file`` and test it against ``event``'s window."""
        metadata = await extract_file_metadata_bounded(
            file,
            self.config,
            metadata_loader=self.metadata_loader,
            clock=self.clock,
        )
        time_validation = validate_file_creation_time(
            metadata, event.starts_at, event.ends_at, self.config
        )
        return FileVerdict(metadata=metadata, time_validation=time_validation)

    async def validate_batch(
        self, access_token: str, files: Sequence[RawFile]
    ) -> UploadBatchResult:
        """Check every file concurrently; the batch passes only if all files do.

        Raises :class:`EventNotFoundError` for unknown tokens and
        :class:`InvalidFileError` when a file lacks required properties.
        """
        event = self.resolve_event(access_token)
        with structlog.contextvars.bound_contextvars(event_id=event.id):
            verdicts = await asyncio.gather(
                *(self.check_file(file, event) for file in files)
            )
            result = UploadBatchResult(event_id=event.id, verdicts=tuple(verdicts))

            if result.accepted:
                self.upload_log.record(
                    event_id=event.id,
                    access_token=event.access_token,
                    verdicts=result.verdicts,
                    received_at=self.clock(),
                )
                self.log.info(
                    "uploads.batch.accepted",
                    extra={"event_id": event.id, "files": len(result.verdicts)},
                )
            else:
                self.log.warning(
                    "uploads.batch.rejected",
                    extra={
                        "event_id": event.id,
                        "files": len(result.verdicts),
                        "rejected": sum(not v.accepted for v in result.verdicts),
                    },
                )
        return result
