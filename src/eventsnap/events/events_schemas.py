"""Pydantic schemas for event requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from .events_models import Event


class EventTimesRequest(BaseModel):
    start_date: str = Field(..., description="Local start date, YYYY-MM-DD")
    end_date: str = Field(..., description="Local end date, YYYY-MM-DD")
    start_time: str = Field(..., description="Local start time, HH:mm")
    end_time: str = Field(..., description="Local end time, HH:mm")


class EventCreateRequest(EventTimesRequest):
    name: str = Field(..., min_length=1, max_length=200)


class EventTimesResponse(BaseModel):
    is_valid: bool
    errors: list[str]


class EventResponse(BaseModel):
    id: str
    name: str
    access_token: str
    starts_at: datetime
    ends_at: datetime

    @classmethod
    def from_domain(cls, event: Event) -> "EventResponse":
        return cls(
            id=event.id,
            name=event.name,
            access_token=event.access_token,
            starts_at=event.starts_at,
            ends_at=event.ends_at,
        )
