"""
Pydantic models for user data.

Users carry nothing but a username and the identifier assigned by the
store.  The identifier is serialized as ``_id``.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """Schema for registering a user.

    Usernames are not unique.  Surrounding whitespace is stripped and a
    blank name is rejected.
    """

    username: str = Field(None, validate_default=True, examples=["fcc_test"])

    @field_validator("username", mode="before")
    @classmethod
    def require_username(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("username is required")
        return v.strip()


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    username: str = Field(..., examples=["fcc_test"])
    id: str = Field(..., alias="_id", examples=["1"])

    # Allow construction with ``id=...`` while serializing as ``_id``.
    model_config = {
        "populate_by_name": True,
    }
