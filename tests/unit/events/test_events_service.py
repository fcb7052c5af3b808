from __future__ import annotations

from datetime import datetime

import pytest

from src.eventsnap.events.events_errors import EventTimeRangeError
from src.eventsnap.events.events_repository import EventRepository
from src.eventsnap.events.events_service import EventService

pytestmark = pytest.mark.unit

NOW = datetime(2024, 6, 1, 12, 0)


def build_service() -> EventService:
    return EventService(
        repo=EventRepository(),
        clock=lambda: NOW,
        token_factory=lambda: "token-abc",
    )


def test_create_event_stores_event_with_access_token() -> None:
    service = build_service()

    event = service.create_event(
        "Summer party",
        start_date="2024-06-02",
        end_date="2024-06-02",
        start_time="18:00",
        end_time="23:30",
    )

    assert event.access_token == "token-abc"
    assert event.starts_at == datetime(2024, 6, 2, 18, 0)
    assert event.ends_at == datetime(2024, 6, 2, 23, 30)
    assert event.created_at == NOW
    assert service.get_by_token("token-abc") == event


def test_create_event_rejects_invalid_range() -> None:
    service = build_service()

    with pytest.raises(EventTimeRangeError) as excinfo:
        service.create_event(
            "Backwards",
            start_date="2024-06-03",
            end_date="2024-06-02",
            start_time="10:00",
            end_time="11:00",
        )

    assert excinfo.value.errors == ["End date cannot be before start date"]
    assert list(service.repo.list_events()) == []


def test_repository_rejects_duplicate_tokens() -> None:
    service = build_service()
    kwargs = dict(
        start_date="2024-06-02", end_date="2024-06-02", start_time="10:00", end_time="11:00"
    )
    service.create_event("First", **kwargs)

    with pytest.raises(ValueError, match="already in use"):
        service.create_event("Second", **kwargs)


def test_unknown_token_raises_key_error() -> None:
    service = build_service()

    with pytest.raises(KeyError):
        service.get_by_token("missing")
