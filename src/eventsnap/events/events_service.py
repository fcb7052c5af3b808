"""Domain service for event creation."""

from __future__ import annotations

import logging
import secrets
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from .event_times import combine_date_and_time, validate_event_times
from .events_errors import EventTimeRangeError
from .events_models import Event, EventTimeValidationResult
from .events_repository import EventRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EventService:
    """Validate proposed time ranges and register new events."""

    repo: EventRepository
    clock: Callable[[], datetime] = datetime.now
    token_factory: Callable[[], str] = field(
        default_factory=lambda: lambda: secrets.token_urlsafe(16)
    )
    log: logging.Logger = field(default_factory=lambda: logger)

    def check_times(
        self, start_date: str, end_date: str, start_time: str, end_time: str
    ) -> EventTimeValidationResult:
        return validate_event_times(
            start_date, end_date, start_time, end_time, now=self.clock()
        )

    def create_event(
        self,
        name: str,
        *,
        start_date: str,
        end_date: str,
        start_time: str,
        end_time: str,
    ) -> Event:
        """Store a new event or raise :class:`EventTimeRangeError`."""
        result = self.check_times(start_date, end_date, start_time, end_time)
        if not result.is_valid:
            self.log.warning(
                "events.create.rejected",
                extra={"event_name": name, "errors": list(result.errors)},
            )
            raise EventTimeRangeError(result.errors)

        event = Event(
            id=uuid.uuid4().hex,
            name=name,
            access_token=self.token_factory(),
            starts_at=combine_date_and_time(start_date, start_time),
            ends_at=combine_date_and_time(end_date, end_time),
            created_at=self.clock(),
        )
        self.repo.add(event)
        self.log.info(
            "events.create.done",
            extra={
                "event_id": event.id,
                "starts_at": event.starts_at.isoformat(),
                "ends_at": event.ends_at.isoformat(),
            },
        )
        return event

    def get_by_token(self, access_token: str) -> Event:
        return self.repo.get_by_token(access_token)
