"""Caretaker schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    field_validator,
)

from shelter.models.user import UserStatus

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def _validate_relaxed_email(value: str) -> str:
    """Accept ``*.local`` addresses used by shelter kiosks, otherwise validate strictly."""

    email = value.strip().lower()
    try:
        return _EMAIL_ADAPTER.validate_python(email)
    except ValueError:
        local_part, _, domain = email.partition("@")
        if local_part and domain.endswith(".local"):
            return email
        raise


class UserBase(BaseModel):
    """Shared caretaker fields."""

    email: str
    full_name: str = Field(min_length=1, max_length=240)

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _validate_relaxed_email(value)


class UserCreate(UserBase):
    """Payload for registering a caretaker."""

    password: str = Field(min_length=8)


class UserRead(UserBase):
    """Serialized caretaker."""

    id: uuid.UUID
    status: UserStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
