"""
Shared schema base and response envelopes.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str


class ErrorResponse(BaseModel):
    status: Literal["fail", "error"]
    message: str
