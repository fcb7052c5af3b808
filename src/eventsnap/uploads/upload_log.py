"""Record of accepted uploads handed over for persistence."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from .upload_models import FileVerdict


@dataclass(frozen=True, slots=True)
class AcceptedUpload:
    event_id: str
    access_token: str
    file_name: str
    file_type: str
    file_size: int
    created_at: datetime | None
    received_at: datetime


class UploadLog:
    """Thread-safe in-memory list of accepted uploads per event."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[AcceptedUpload] = []

    def record(
        self,
        *,
        event_id: str,
        access_token: str,
        verdicts: Sequence[FileVerdict],
        received_at: datetime,
    ) -> list[AcceptedUpload]:
        entries = [
            AcceptedUpload(
                event_id=event_id,
                access_token=access_token,
                file_name=verdict.metadata.original_name,
                file_type=verdict.metadata.mimetype,
                file_size=verdict.metadata.size,
                created_at=verdict.metadata.created_at,
                received_at=received_at,
            )
            for verdict in verdicts
        ]
        with self._lock:
            self._entries.extend(entries)
        return entries

    def for_event(self, event_id: str) -> list[AcceptedUpload]:
        with self._lock:
            return [entry for entry in self._entries if entry.event_id == event_id]
