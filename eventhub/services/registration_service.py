"""
Registration service: register a user for an event, cancel a registration.

CONCURRENCY STRATEGY: Row Lock on the Event + Primary Key Backstop
==================================================================

Problem:
  Two users try to take the last place simultaneously.
  Both count N-1 registrations, both insert, the event ends with N+1.

Solution:
  The whole check-then-insert runs in one transaction that starts by
  locking the event row:

  1. SELECT ... FROM events WHERE id = :event_id FOR UPDATE
  2. Reject past events
  3. SELECT count(*) FROM registrations WHERE event_id = :event_id
  4. INSERT INTO registrations (user_id, event_id)
  5. COMMIT (releases the lock)

  Every registration for the same event queues on step 1, so the count in
  step 3 is always current and capacity is a hard cap under the default
  READ COMMITTED isolation. Registrations for different events never wait
  on each other.

  Double registration is not checked in application code. The composite
  primary key (user_id, event_id) rejects the second insert and the
  IntegrityError is classified into a Conflict result.

  SQLite has no row locks (FOR UPDATE is omitted). Its connections open
  every transaction with BEGIN IMMEDIATE (see eventhub.db.session), which
  takes the database write lock before step 1, so registrations queue there
  instead.
"""

import time

from sqlalchemy import select, delete, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.core import errors
from eventhub.core.errors import ErrorKind, EventError
from eventhub.core.logging import get_logger
from eventhub.core.metrics import record_registration, registration_latency
from eventhub.core.result import Failure, Result, Success
from eventhub.db.base import utcnow
from eventhub.models import Event, Registration

logger = get_logger(__name__)


def _registration_key_fields() -> list[str]:
    """camelCase names of the columns making up the registration key."""
    columns = Registration.__table__.primary_key.columns
    return [_to_camel(column.name) for column in columns]


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def classify_integrity_error(exc: IntegrityError) -> EventError:
    """
    Map a constraint violation raised by the registration insert.

    Unique/primary key violations mean the pair already exists; foreign key
    violations mean the user does not exist (the event row was just read
    under lock). Anything else is not expected from this insert.
    """
    detail = str(exc.orig).lower()
    if "unique" in detail or "duplicate key" in detail:
        return errors.duplicate_registration(_registration_key_fields())
    if "foreign key" in detail:
        return errors.not_found(errors.USER_NOT_FOUND)
    logger.error("registration_integrity_error", error=str(exc.orig))
    return EventError(ErrorKind.INTERNAL, errors.DATABASE_ERROR)


async def _register(db: AsyncSession, event_id: int, user_id: int) -> Result[Registration, EventError]:
    try:
        async with db.begin():
            event = await db.scalar(
                select(Event).where(Event.id == event_id).with_for_update()
            )
            if event is None:
                return Failure(error=errors.not_found())

            if event.date_time < utcnow():
                return Failure(error=EventError(ErrorKind.INVALID_STATE, errors.PAST_EVENT))

            registration_count = await db.scalar(
                select(func.count())
                .select_from(Registration)
                .where(Registration.event_id == event_id)
            )
            if registration_count >= event.capacity:
                return Failure(error=EventError(ErrorKind.CAPACITY_EXCEEDED, errors.EVENT_FULL))

            registration = Registration(user_id=user_id, event_id=event_id)
            db.add(registration)
            await db.flush()
    except IntegrityError as exc:
        return Failure(error=classify_integrity_error(exc))

    return Success(value=registration)


async def register_for_event(
    db: AsyncSession,
    event_id: int,
    user_id: int,
) -> Result[Registration, EventError]:
    """
    Register a user for an event as a single transaction.
    Failures leave no trace in the store.
    """
    started = time.perf_counter()
    result = await _register(db, event_id, user_id)
    registration_latency.observe(time.perf_counter() - started)

    match result:
        case Success():
            record_registration("register", "success")
            logger.info("registration_created", event_id=event_id, user_id=user_id)
        case Failure(error=error):
            record_registration("register", error.kind.value)
            logger.warning(
                "registration_rejected",
                event_id=event_id,
                user_id=user_id,
                reason=error.kind.value,
            )
    return result


async def cancel_registration(
    db: AsyncSession,
    event_id: int,
    user_id: int,
) -> Result[None, EventError]:
    """Delete the (user, event) registration. No time or capacity rules apply."""
    async with db.begin():
        deleted = await db.execute(
            delete(Registration).where(
                Registration.user_id == user_id,
                Registration.event_id == event_id,
            )
        )

    if deleted.rowcount == 0:
        record_registration("cancel", ErrorKind.NOT_FOUND.value)
        logger.warning("registration_cancel_missing", event_id=event_id, user_id=user_id)
        return Failure(error=errors.not_found(errors.REGISTRATION_NOT_FOUND))

    record_registration("cancel", "success")
    logger.info("registration_cancelled", event_id=event_id, user_id=user_id)
    return Success(value=None)
