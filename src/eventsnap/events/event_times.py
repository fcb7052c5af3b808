"""Validation of an event's proposed start/end in local wall-clock time."""

from __future__ import annotations

from datetime import date, datetime

from .events_errors import InvalidEventTimeFormatError
from .events_models import EventTimeValidationResult

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

START_DATE_IN_PAST = "Start date cannot be in the past"
END_DATE_BEFORE_START = "End date cannot be before start date"
START_TIME_IN_PAST = (
    "Start time cannot be in the past for today's date. You can create the event "
    "1 minute ahead of the current time if it has already started"
)
END_TIME_BEFORE_START = "End time cannot be before start time on the same day"


def parse_event_date(value: str) -> date:
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError) as exc:
        raise InvalidEventTimeFormatError(
            f"Invalid date {value!r}, expected YYYY-MM-DD"
        ) from exc


def combine_date_and_time(date_value: str, time_value: str) -> datetime:
    day = parse_event_date(date_value)
    try:
        clock_time = datetime.strptime(time_value, TIME_FORMAT).time()
    except (TypeError, ValueError) as exc:
        raise InvalidEventTimeFormatError(
            f"Invalid time {time_value!r}, expected HH:mm"
        ) from exc
    return datetime.combine(day, clock_time)


def validate_event_times(
    start_date: str,
    end_date: str,
    start_time: str,
    end_time: str,
    *,
    now: datetime | None = None,
) -> EventTimeValidationResult:
    """Check an event's date/time strings against each other and the clock.

    Every failing check contributes its own error. Date-only comparisons keep
    same-day events valid while the start-time check rejects a start moment
    that has already passed today.
    """
    start_day = parse_event_date(start_date)
    end_day = parse_event_date(end_date)
    starts_at = combine_date_and_time(start_date, start_time)
    ends_at = combine_date_and_time(end_date, end_time)

    current = now or datetime.now()
    if current.tzinfo is not None:
        current = current.astimezone().replace(tzinfo=None)
    today = current.date()
    errors: list[str] = []

    if start_day < today:
        errors.append(START_DATE_IN_PAST)

    if end_day < start_day:
        errors.append(END_DATE_BEFORE_START)

    if start_day == today and starts_at < current:
        errors.append(START_TIME_IN_PAST)

    if start_day == end_day and ends_at < starts_at:
        errors.append(END_TIME_BEFORE_START)

    return EventTimeValidationResult(errors=tuple(errors))


__all__ = [
    "combine_date_and_time",
    "parse_event_date",
    "validate_event_times",
]
