"""Domain-specific exceptions for event management."""

from collections.abc import Sequence


class EventError(Exception):
    """Base class for event-related errors."""


class InvalidEventTimeFormatError(EventError):
    """Raised when a date or time string is not ``YYYY-MM-DD`` / ``HH:mm``."""


class EventTimeRangeError(EventError):
    """Raised when a proposed event time range fails validation."""

    def __init__(self, errors: Sequence[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)
