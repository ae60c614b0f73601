"""
Error taxonomy shared by services and the HTTP error translator.

Every expected failure is an ``EventError`` carrying one of the closed set of
``ErrorKind`` values. The HTTP layer maps kinds to status codes through
``STATUS_CODES``; nothing else decides a status code.
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import status


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CAPACITY_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Messages surfaced to clients
EVENT_NOT_FOUND = "No event found with that ID."
USER_NOT_FOUND = "No user found with that ID."
PAST_EVENT = "Cannot register for a past event."
EVENT_FULL = "Event is at full capacity."
REGISTRATION_NOT_FOUND = (
    "Record not found. The user might not have been registered for this event."
)
DATABASE_ERROR = "An internal database error occurred."
UNEXPECTED_ERROR = "An unexpected internal server error occurred."


@dataclass(frozen=True, slots=True)
class EventError:
    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @property
    def is_client_error(self) -> bool:
        """Client-caused failures report ``fail``; server-caused ones ``error``."""
        return self.kind is not ErrorKind.INTERNAL


def not_found(message: str = EVENT_NOT_FOUND) -> EventError:
    return EventError(ErrorKind.NOT_FOUND, message)


def duplicate_registration(fields: list[str]) -> EventError:
    return EventError(
        ErrorKind.CONFLICT,
        f"Duplicate field value: {', '.join(fields)}. "
        "This user is likely already registered for this event.",
    )
