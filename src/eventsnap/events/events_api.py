"""HTTP routes for event creation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status

from ..responses import FailureReason, error_response
from .events_errors import EventTimeRangeError, InvalidEventTimeFormatError
from .events_schemas import (
    EventCreateRequest,
    EventResponse,
    EventTimesRequest,
    EventTimesResponse,
)
from .events_service import EventService

router = APIRouter(prefix="/api/events", tags=["events"])
logger = logging.getLogger(__name__)


def get_event_service(request: Request) -> EventService:
    """Fetch event service from application state."""
    try:
        return request.app.state.event_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("EventService is not configured") from exc


@router.post("", status_code=status.HTTP_201_CREATED, response_model=EventResponse)
def create_event(
    payload: EventCreateRequest,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    """Validate the proposed time range and register the event."""
    try:
        event = service.create_event(
            payload.name,
            start_date=payload.start_date,
            end_date=payload.end_date,
            start_time=payload.start_time,
            end_time=payload.end_time,
        )
    except InvalidEventTimeFormatError as exc:
        raise error_response(
            status.HTTP_400_BAD_REQUEST,
            FailureReason.INVALID_REQUEST,
            details=str(exc),
        ) from exc
    except EventTimeRangeError as exc:
        raise error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            FailureReason.INVALID_EVENT_TIME,
            errors=exc.errors,
        ) from exc
    return EventResponse.from_domain(event)


@router.post("/validate-times", response_model=EventTimesResponse)
def validate_times(
    payload: EventTimesRequest,
    service: EventService = Depends(get_event_service),
) -> EventTimesResponse:
    """Report every problem with a proposed time range without creating it."""
    try:
        result = service.check_times(
            payload.start_date, payload.end_date, payload.start_time, payload.end_time
        )
    except InvalidEventTimeFormatError as exc:
        raise error_response(
            status.HTTP_400_BAD_REQUEST,
            FailureReason.INVALID_REQUEST,
            details=str(exc),
        ) from exc
    return EventTimesResponse(is_valid=result.is_valid, errors=list(result.errors))


@router.get("/{access_token}", response_model=EventResponse)
def get_event(
    access_token: str,
    service: EventService = Depends(get_event_service),
) -> EventResponse:
    try:
        event = service.get_by_token(access_token)
    except KeyError:
        logger.warning("events.lookup.not_found")
        raise error_response(
            status.HTTP_404_NOT_FOUND, FailureReason.EVENT_NOT_FOUND
        ) from None
    return EventResponse.from_domain(event)
