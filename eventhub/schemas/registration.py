"""
Pydantic schemas for registration request bodies.
"""

from typing import Any, ClassVar

from pydantic import field_validator, model_validator
from pydantic_core import PydanticCustomError

from eventhub.db.base import MAX_ID
from eventhub.schemas.common import CamelModel


class _UserReference(CamelModel):
    user_id: int

    missing_user_message: ClassVar[str] = "User ID is required."

    @model_validator(mode="before")
    @classmethod
    def require_user_id(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("userId", data.get("user_id")) in (None, "", 0):
            raise PydanticCustomError("missing_user_id", cls.missing_user_message)
        return data

    @field_validator("user_id", mode="before")
    @classmethod
    def positive_integer(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise PydanticCustomError("user_id_type", "User ID must be a positive integer.")
        if value > MAX_ID:
            raise PydanticCustomError("user_id_range", "User ID is out of range.")
        return value


class RegistrationCreate(_UserReference):
    missing_user_message: ClassVar[str] = "User ID is required for registration."


class RegistrationCancel(_UserReference):
    missing_user_message: ClassVar[str] = "User ID is required to cancel a registration."
