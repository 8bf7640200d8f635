"""
Pydantic models for exercise entries and the exercise log.

``ExerciseCreate`` validates the body of a new entry.  ``ExerciseRead``
is the response to logging an exercise: the stored entry joined with
its owner's username and id.  ``ExerciseLog`` is the response of a log
query.  Dates are already rendered in the display form
``"Www Mmm dd yyyy"`` when the response models are built.
"""

import re
from datetime import date as CalendarDate
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.dates import parse_date


_INTEGER_RE = re.compile(r"[+-]?\d+")

# Values outside this range cannot be bound as SQLite integers.
_MAX_INT = 2**63 - 1


def parse_int(value: Any) -> Optional[int]:
    """Parse ``value`` as a base‑10 integer or return ``None``.

    Accepts an ``int``, an integral ``float`` or a string such as
    ``" 30 "``.  Booleans and anything outside the SQLite integer range
    are refused.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = int(value) if value.is_integer() else None
    elif isinstance(value, str):
        text = value.strip()
        value = int(text) if _INTEGER_RE.fullmatch(text) and len(text) <= 20 else None
    elif not isinstance(value, int):
        return None
    if value is None or abs(value) > _MAX_INT:
        return None
    return value


class ExerciseCreate(BaseModel):
    """Schema for logging an exercise.

    ``duration`` must be a whole number of minutes; ``date`` is optional
    and comes out as ``None`` when it is missing, blank or unparseable,
    leaving the service to substitute today's date.
    """

    description: str = Field(None, validate_default=True, examples=["Running"])
    duration: int = Field(None, validate_default=True, examples=[30])
    date: Optional[CalendarDate] = Field(None, examples=["2024-01-01"])

    @field_validator("description", mode="before")
    @classmethod
    def require_description(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("description is required")
        return v

    @field_validator("duration", mode="before")
    @classmethod
    def parse_duration(cls, v: Any) -> int:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("duration is required")
        minutes = parse_int(v)
        if minutes is None:
            raise ValueError("duration must be an integer number of minutes")
        return minutes

    @field_validator("date", mode="before")
    @classmethod
    def lenient_date(cls, v: Any) -> Optional[CalendarDate]:
        if isinstance(v, CalendarDate):
            return v
        return parse_date(v) if isinstance(v, str) else None


class ExerciseRead(BaseModel):
    """Schema returned after an exercise has been added."""

    username: str = Field(..., examples=["fcc_test"])
    description: str = Field(..., examples=["Running"])
    duration: int = Field(..., examples=[30])
    date: str = Field(..., examples=["Mon Jan 01 2024"])
    id: str = Field(..., alias="_id", examples=["1"])

    model_config = {
        "populate_by_name": True,
    }


class LogEntry(BaseModel):
    description: str
    duration: int
    date: str


class ExerciseLog(BaseModel):
    """Schema for a user's filtered exercise log."""

    username: str
    count: int = Field(..., description="Number of entries in ``log``")
    id: str = Field(..., alias="_id")
    log: List[LogEntry] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True,
    }


class ErrorResponse(BaseModel):
    """Body of soft, validation and store errors."""

    error: str = Field(..., examples=["User not found"])
