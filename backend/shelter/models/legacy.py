"""Legacy Portuguese-field tables kept only as the migration source."""
from __future__ import annotations

import uuid
import datetime as dt

from sqlalchemy import Boolean, Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from shelter.db.base import Base
from shelter.models.mixins import TimestampMixin

LEGACY_FEMALE = "Fêmea"


class LegacyAnimal(TimestampMixin, Base):
    """Animal row written by the first version of the shelter app."""

    __tablename__ = "legacy_animals"

    __table_args__ = (Index("ix_legacy_animals_created_by", "created_by"),)

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, unique=True)
    nome: Mapped[str] = mapped_column(String(120), nullable=False)
    sexo: Mapped[str] = mapped_column(String(16), nullable=False)
    pelagem: Mapped[str] = mapped_column(String(120), nullable=False)
    idade: Mapped[str] = mapped_column(String(60), nullable=False)
    nome_tutor: Mapped[str] = mapped_column(String(240), nullable=False)
    tratamento_para: Mapped[str] = mapped_column(String(1024), nullable=False)
    tratamento: Mapped[str] = mapped_column(String(1024), nullable=False)
    fiv: Mapped[bool | None] = mapped_column(Boolean)
    felv: Mapped[bool | None] = mapped_column(Boolean)
    raiva: Mapped[bool | None] = mapped_column(Boolean)
    v6: Mapped[bool | None] = mapped_column(Boolean)
    ativo: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_by: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)


class LegacyMedicationRecord(TimestampMixin, Base):
    """Medication row written by the first version of the shelter app."""

    __tablename__ = "legacy_medication_records"

    __table_args__ = (
        Index("ix_legacy_medication_records_animal_data", "animal_id", "data"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, unique=True)
    # Plain column: legacy rows may point at animals that no longer exist.
    animal_id: Mapped[uuid.UUID] = mapped_column(nullable=False)
    data: Mapped[dt.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[dt.date | None] = mapped_column(Date)
    horario: Mapped[str] = mapped_column(String(5), nullable=False)
    medicamento: Mapped[str] = mapped_column(String(255), nullable=False)
    dose: Mapped[str] = mapped_column(String(120), nullable=False)
    administrado: Mapped[bool] = mapped_column(Boolean, nullable=False)
    observacoes: Mapped[str | None] = mapped_column(String(2048))
    administrado_por: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("users.id"))
