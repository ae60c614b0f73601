from eventhub.schemas.common import ErrorResponse, MessageResponse
from eventhub.schemas.event import (
    EventCreate,
    EventCreatedResponse,
    EventDetail,
    EventDetailResponse,
    EventOut,
    EventStats,
    EventStatsResponse,
    RegisteredUser,
    UpcomingEventsResponse,
)
from eventhub.schemas.registration import RegistrationCreate, RegistrationCancel

__all__ = [
    "ErrorResponse", "MessageResponse",
    "EventCreate", "EventCreatedResponse", "EventDetail", "EventDetailResponse",
    "EventOut", "EventStats", "EventStatsResponse", "RegisteredUser", "UpcomingEventsResponse",
    "RegistrationCreate", "RegistrationCancel",
]
