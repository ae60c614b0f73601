"""
Result types for service operations that can fail in expected ways.

Services return ``Success(value=...)`` or ``Failure(error=...)`` instead of
raising, and routers pattern-match on the outcome:

    match await register_for_event(db, event_id, user_id):
        case Success(value=registration):
            ...
        case Failure(error=error):
            return error_response(error)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    error: E


Result = Union[Success[T], Failure[E]]
