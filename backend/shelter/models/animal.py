"""Shelter animal model."""

from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shelter.db.base import Base
from shelter.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from shelter.models.medication_record import MedicationRecord


class AnimalSex(str, enum.Enum):
    """Sex values as the shelter records them."""

    MALE = "Macho"
    FEMALE = "Femea"


class Animal(TimestampMixin, Base):
    """An animal taken in by the shelter; `active=False` marks a soft delete."""

    __tablename__ = "animals"

    __table_args__ = (Index("ix_animals_created_by", "created_by"),)

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    sex: Mapped[AnimalSex] = mapped_column(
        Enum(
            AnimalSex,
            name="animalsex",
            values_callable=lambda enum_cls: [item.value for item in enum_cls],
        ),
        nullable=False,
    )
    coat: Mapped[str] = mapped_column(String(120), nullable=False)
    age: Mapped[str] = mapped_column(String(60), nullable=False)
    owner_name: Mapped[str] = mapped_column(String(240), nullable=False)
    treatment_for: Mapped[str] = mapped_column(String(1024), nullable=False)
    treatment: Mapped[str] = mapped_column(String(1024), nullable=False)
    # Retrovirus tests and vaccinations; absent means "not recorded".
    fiv: Mapped[bool | None] = mapped_column(Boolean, default=False)
    felv: Mapped[bool | None] = mapped_column(Boolean, default=False)
    rabies: Mapped[bool | None] = mapped_column(Boolean, default=False)
    v6: Mapped[bool | None] = mapped_column(Boolean, default=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_by: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id"), nullable=False
    )

    medication_records: Mapped[list["MedicationRecord"]] = relationship(
        "MedicationRecord", back_populates="animal"
    )
