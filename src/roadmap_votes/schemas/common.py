"""Shared Pydantic schemas for the response envelope."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from roadmap_votes.core.errors import ErrorCode
from roadmap_votes.db.time import as_utc

T = TypeVar("T")

# Timestamps always leave the API as UTC, even when the store drops the zone.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """Base schema exposing camelCase JSON keys and reading ORM attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessEnvelope(BaseModel, Generic[T]):
    """``{"success": true, "data": ...}``"""

    success: Literal[True] = True
    data: T


class ErrorBody(BaseModel):
    code: ErrorCode
    message: str


class ErrorEnvelope(BaseModel):
    """``{"success": false, "error": {"code": ..., "message": ...}}``"""

    success: Literal[False] = False
    error: ErrorBody


class MessageResponse(BaseModel):
    message: str
