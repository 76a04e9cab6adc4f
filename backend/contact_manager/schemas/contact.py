"""
Contact schemas: write-time candidate (normalization + field rules) and the stored document.
"""

import re
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
INVALID_EMAIL_MESSAGE = "Please enter a valid email"


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def _cast_to_text(value: Any, field: str) -> str | None:
    """Scalars are stored in their string form; containers cannot be."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    raise PydanticCustomError(
        "string_cast",
        "Cast to string failed for value at path `{field}`.",
        {"field": field},
    )


class ContactCandidate(BaseModel):
    """
    Fields accepted on create. Required fields are trimmed, then checked; every
    failing field produces one error whose message is user-facing.
    """
    model_config = ConfigDict(extra="ignore", validate_default=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def require_trimmed_text(cls, v: Any, info: ValidationInfo) -> str:
        value = _cast_to_text(v, info.field_name)
        value = value.strip() if value is not None else ""
        if not value:
            raise PydanticCustomError(
                "required",
                "Path `{field}` is required.",
                {"field": info.field_name},
            )
        return value

    @field_validator("email")
    @classmethod
    def match_email_pattern(cls, v: str) -> str:
        if not is_valid_email(v):
            raise PydanticCustomError("email_pattern", INVALID_EMAIL_MESSAGE)
        return v

    @field_validator("message", mode="before")
    @classmethod
    def default_message(cls, v: Any, info: ValidationInfo) -> str:
        value = _cast_to_text(v, info.field_name)
        return "" if value is None else value


class Contact(BaseModel):
    """Stored contact document. Serialized with the store's field names (_id, createdAt, updatedAt)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    name: str
    email: str
    phone: str
    message: str = ""
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def object_id_to_str(cls, v: Any) -> Any:
        if isinstance(v, ObjectId):
            return str(v)
        return v

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Documents read without tz_aware come back naive but are always UTC.
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
