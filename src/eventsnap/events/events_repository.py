"""In-memory event store keyed by id and access token."""

from __future__ import annotations

import threading
from collections.abc import Sequence

from .events_models import Event


class EventRepository:
    """Keep events for the lifetime of the process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[str, Event] = {}
        self._id_by_token: dict[str, str] = {}

    def add(self, event: Event) -> Event:
        with self._lock:
            if event.access_token in self._id_by_token:
                raise ValueError(f"Access token for event '{event.id}' is already in use")
            self._by_id[event.id] = event
            self._id_by_token[event.access_token] = event.id
        return event


    def get_by_token(self, access_token: str) -> Event:
        with self._lock:
            event_id = self._id_by_token.get(access_token)
            event = self._by_id.get(event_id) if event_id is not None else None
        if event is None:
            raise KeyError(f"Event with access token '{access_token}' not found")
        return event

    def list_events(self) -> Sequence[Event]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda event: event.starts_at)
