"""Failure reasons and error payloads shared by the routers."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from fastapi import HTTPException


class FailureReason(StrEnum):
    """Failure reasons enumerated in upload and event error payloads."""

    INVALID_REQUEST = "invalid_request"
    EVENT_NOT_FOUND = "event_not_found"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UPLOAD_REJECTED = "upload_rejected"
    INVALID_EVENT_TIME = "invalid_event_time"


def error_response(
    status_code: int, reason: FailureReason, **extra: Any
) -> HTTPException:
    """Build an ``HTTPException`` with the uniform error detail payload."""
    detail: dict[str, Any] = {"status": "error", "failure_reason": reason.value}
    detail.update({key: value for key, value in extra.items() if value is not None})
    return HTTPException(status_code=status_code, detail=detail)
