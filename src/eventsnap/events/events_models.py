"""Data structures for events."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class EventTimeValidationResult:
    """Outcome of checking a proposed event time range."""

    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True)
class Event:
    """An event accepting photo uploads between ``starts_at`` and ``ends_at``."""

    id: str
    name: str
    access_token: str
    starts_at: datetime
    ends_at: datetime
    created_at: datetime = field(default_factory=datetime.now)
