"""
Event service: create, fetch, upcoming listing and capacity statistics.
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.core.errors import EventError, not_found
from eventhub.core.logging import get_logger
from eventhub.core.metrics import events_created
from eventhub.core.result import Failure, Result, Success
from eventhub.db.base import utcnow
from eventhub.models import Event, Registration, User
from eventhub.schemas.event import EventCreate, EventDetail, EventOut, EventStats, RegisteredUser

logger = get_logger(__name__)


async def create_event(db: AsyncSession, event_data: EventCreate) -> Event:
    """Persist a validated event. Past dates are allowed."""
    event = Event(
        title=event_data.title,
        date_time=event_data.date_time,
        location=event_data.location,
        capacity=event_data.capacity,
    )
    async with db.begin():
        db.add(event)

    events_created.inc()
    logger.info("event_created", event_id=event.id, title=event.title, capacity=event.capacity)
    return event


async def get_event_detail(db: AsyncSession, event_id: int) -> Result[EventDetail, EventError]:
    """Event fields plus the users registered for it, in registration order."""
    event = await db.get(Event, event_id)
    if event is None:
        return Failure(error=not_found())

    result = await db.execute(
        select(User.id, User.name, User.email)
        .join(Registration, Registration.user_id == User.id)
        .where(Registration.event_id == event_id)
        .order_by(Registration.created_at.asc(), User.id.asc())
    )
    registered_users = [
        RegisteredUser(id=row.id, name=row.name, email=row.email) for row in result
    ]

    return Success(
        value=EventDetail(
            id=event.id,
            title=event.title,
            date_time=event.date_time,
            location=event.location,
            capacity=event.capacity,
            registered_users=registered_users,
        )
    )


async def list_upcoming_events(db: AsyncSession) -> list[EventOut]:
    """
    All events starting strictly after now, soonest first, ties by location.
    Served by the ix_events_date_time_location index.
    """
    result = await db.execute(
        select(Event)
        .where(Event.date_time > utcnow())
        .order_by(Event.date_time.asc(), Event.location.asc())
    )
    return [EventOut.model_validate(event) for event in result.scalars().all()]


def compute_stats(capacity: int, total_registrations: int) -> EventStats:
    """
    Capacity usage figures. Remaining capacity goes negative if a race
    ever overbooked the event; a zero capacity reports 0% instead of dividing.
    """
    percentage = (total_registrations / capacity) * 100 if capacity > 0 else 0
    return EventStats(
        total_registrations=total_registrations,
        remaining_capacity=capacity - total_registrations,
        percentage_capacity_used=round(percentage, 2),
    )


async def get_event_stats(db: AsyncSession, event_id: int) -> Result[EventStats, EventError]:
    event = await db.get(Event, event_id)
    if event is None:
        return Failure(error=not_found())

    total = await db.scalar(
        select(func.count()).select_from(Registration).where(Registration.event_id == event_id)
    )
    return Success(value=compute_stats(event.capacity, int(total or 0)))
