"""Scheduled medication dose model."""
from __future__ import annotations

import uuid
import datetime as dt
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shelter.db.base import Base
from shelter.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from shelter.models.animal import Animal


class MedicationRecord(TimestampMixin, Base):
    """One dose of one medication for one animal on one day."""

    __tablename__ = "medication_records"

    __table_args__ = (
        Index("ix_medication_records_animal_date", "animal_id", "date"),
        Index("ix_medication_records_date", "date"),
        Index("ix_medication_records_group_id", "group_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, unique=True)
    animal_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("animals.id"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date | None] = mapped_column(Date)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    medication: Mapped[str] = mapped_column(String(255), nullable=False)
    dose: Mapped[str] = mapped_column(String(120), nullable=False)
    administered: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    observations: Mapped[str | None] = mapped_column(String(2048))
    administered_by: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("users.id"))
    group_id: Mapped[str | None] = mapped_column(String(64))

    animal: Mapped["Animal"] = relationship("Animal", back_populates="medication_records")
