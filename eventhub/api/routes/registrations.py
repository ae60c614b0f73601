"""
Registration endpoints: register for and cancel attendance of an event.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.api.errors import error_response
from eventhub.api.routes.events import EventId
from eventhub.core.result import Failure, Success
from eventhub.db.session import get_db
from eventhub.schemas.common import ErrorResponse, MessageResponse
from eventhub.schemas.registration import RegistrationCancel, RegistrationCreate
from eventhub.services.registration_service import cancel_registration, register_for_event

router = APIRouter(prefix="/events", tags=["Registrations"])


@router.post(
    "/{event_id}/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def register_endpoint(
    event_id: EventId,
    payload: RegistrationCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a user for an event.

    Rejected when the event does not exist (404), has already started (400),
    is full (400) or the user is already registered (409).
    """
    match await register_for_event(db, event_id, payload.user_id):
        case Success():
            return MessageResponse(message="User registered for the event successfully.")
        case Failure(error=error):
            return error_response(error)


@router.delete(
    "/{event_id}/register",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
async def cancel_endpoint(
    event_id: EventId,
    payload: RegistrationCancel,
    db: AsyncSession = Depends(get_db),
):
    """Cancel a registration. 404 when the user was not registered."""
    match await cancel_registration(db, event_id, payload.user_id):
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return error_response(error)
