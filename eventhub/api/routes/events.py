"""
Event endpoints: create, upcoming listing, detail and statistics.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.api.errors import error_response
from eventhub.core.result import Failure, Success
from eventhub.db.base import MAX_ID
from eventhub.db.session import get_db
from eventhub.schemas.common import ErrorResponse
from eventhub.schemas.event import (
    EventCreate,
    EventCreatedResponse,
    EventDetailResponse,
    EventStatsResponse,
    UpcomingEvents,
    UpcomingEventsResponse,
)
from eventhub.services.event_service import (
    create_event,
    get_event_detail,
    get_event_stats,
    list_upcoming_events,
)

router = APIRouter(prefix="/events", tags=["Events"])

NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}

# Ids outside the column range are rejected as bad input before reaching the store
EventId = Annotated[int, Path(ge=1, le=MAX_ID)]


@router.post(
    "",
    response_model=EventCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def create_event_endpoint(
    event_data: EventCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create an event. Capacity must be 1..1000, dateTime ISO 8601."""
    event = await create_event(db, event_data)
    return EventCreatedResponse(event_id=event.id)


# Declared before /{event_id} so "upcoming" is not parsed as an id
@router.get("/upcoming", response_model=UpcomingEventsResponse)
async def list_upcoming_events_endpoint(db: AsyncSession = Depends(get_db)):
    """
    Every event that has not started yet, ordered by start time then location.
    Not paginated.
    """
    events = await list_upcoming_events(db)
    return UpcomingEventsResponse(results=len(events), data=UpcomingEvents(events=events))


@router.get("/{event_id}", response_model=EventDetailResponse, responses=NOT_FOUND_RESPONSE)
async def get_event_endpoint(event_id: EventId, db: AsyncSession = Depends(get_db)):
    """Event details with the id, name and email of every registered user."""
    match await get_event_detail(db, event_id):
        case Success(value=detail):
            return EventDetailResponse(data=detail)
        case Failure(error=error):
            return error_response(error)


@router.get("/{event_id}/stats", response_model=EventStatsResponse, responses=NOT_FOUND_RESPONSE)
async def get_event_stats_endpoint(event_id: EventId, db: AsyncSession = Depends(get_db)):
    match await get_event_stats(db, event_id):
        case Success(value=stats):
            return EventStatsResponse(data=stats)
        case Failure(error=error):
            return error_response(error)
