"""Caretaker accounts used to identify who records and administers doses."""
from __future__ import annotations

import enum
import uuid

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from shelter.db.base import Base
from shelter.models.mixins import TimestampMixin


class UserStatus(str, enum.Enum):
    """Enumerates caretaker activation states."""

    ACTIVE = "active"
    SUSPENDED = "suspended"


class User(TimestampMixin, Base):
    """A shelter caretaker able to sign in."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(240), nullable=False)
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus), default=UserStatus.ACTIVE, nullable=False
    )
