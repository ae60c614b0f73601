"""
Pydantic schemas for event-related request/response validation.

Validation failures raise ``PydanticCustomError`` so the client sees one
plain sentence naming the broken rule rather than pydantic's default text.
"""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from eventhub.models.event import MAX_CAPACITY
from eventhub.schemas.common import CamelModel

REQUIRED_EVENT_FIELDS = (
    ("title", "title"),
    ("dateTime", "date_time"),
    ("location", "location"),
    ("capacity", "capacity"),
)


def _is_blank(value: Any) -> bool:
    # A zero capacity counts as not provided, like an empty string
    return value in (None, "", 0)


class EventCreate(CamelModel):
    title: str = Field(..., max_length=255)
    date_time: datetime
    location: str = Field(..., max_length=255)
    capacity: int

    @model_validator(mode="before")
    @classmethod
    def require_all_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        missing = [
            alias
            for alias, attr in REQUIRED_EVENT_FIELDS
            if _is_blank(data.get(alias, data.get(attr)))
        ]
        if missing:
            raise PydanticCustomError(
                "missing_fields",
                "Please provide all required fields: title, dateTime, location, capacity.",
                {"missing": missing},
            )
        return data

    @field_validator("capacity", mode="before")
    @classmethod
    def capacity_in_range(cls, value: Any) -> int:
        # bool is an int subclass; 12.0 is accepted as 12
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_CAPACITY:
            raise PydanticCustomError(
                "capacity_range",
                "Capacity must be a positive integer less than or equal to {max_capacity}.",
                {"max_capacity": MAX_CAPACITY},
            )
        return value

    @field_validator("date_time", mode="before")
    @classmethod
    def parse_iso_datetime(cls, value: Any) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        else:
            try:
                parsed = datetime.fromisoformat(value)
            except (TypeError, ValueError):
                raise PydanticCustomError(
                    "date_time_format", "Invalid ISO format for dateTime."
                ) from None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)


class EventCreatedResponse(CamelModel):
    status: Literal["success"] = "success"
    message: str = "Event created successfully."
    event_id: int


class EventOut(CamelModel):
    id: int
    title: str
    date_time: datetime
    location: str
    capacity: int


class RegisteredUser(CamelModel):
    id: int
    name: str
    email: str


class EventDetail(EventOut):
    registered_users: list[RegisteredUser]


class EventDetailResponse(CamelModel):
    status: Literal["success"] = "success"
    data: EventDetail


class UpcomingEvents(CamelModel):
    events: list[EventOut]


class UpcomingEventsResponse(CamelModel):
    status: Literal["success"] = "success"
    results: int
    data: UpcomingEvents


class EventStats(CamelModel):
    total_registrations: int
    remaining_capacity: int
    percentage_capacity_used: float


class EventStatsResponse(CamelModel):
    status: Literal["success"] = "success"
    data: EventStats
