"""Medication record schemas."""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from shelter.schemas.animal import AnimalSummary

TimeOfDay = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]
GroupId = Annotated[str, Field(min_length=1, max_length=64)]

# Longest date span one scheduling request may expand into daily records.
MAX_SCHEDULE_DAYS = 366


def _check_span(start: dt.date, end: dt.date | None) -> None:
    if end is not None and (end - start).days + 1 > MAX_SCHEDULE_DAYS:
        raise ValueError(f"A schedule may span at most {MAX_SCHEDULE_DAYS} days")


class MedicationTemplate(BaseModel):
    """Fields repeated on every record of one scheduling request."""

    animal_id: uuid.UUID
    medication: str = Field(min_length=1, max_length=255)
    dose: str = Field(min_length=1, max_length=120)
    observations: str | None = Field(default=None, max_length=2048)
    group_id: GroupId | None = None


class MedicationRecordCreate(MedicationTemplate):
    """Payload for a single dose."""

    date: dt.date
    end_date: dt.date | None = None
    time: TimeOfDay

    @model_validator(mode="after")
    def _end_not_before_date(self) -> "MedicationRecordCreate":
        if self.end_date is not None and self.end_date < self.date:
            raise ValueError("end_date must not be before date")
        return self


class MedicationRangeCreate(MedicationTemplate):
    """Payload for one dose per day between two dates, inclusive."""

    start_date: dt.date
    end_date: dt.date
    time: TimeOfDay

    @model_validator(mode="after")
    def _limit_span(self) -> "MedicationRangeCreate":
        _check_span(self.start_date, self.end_date)
        return self


class MedicationOrderCreate(MedicationTemplate):
    """Payload for a treatment with one or more dose times per day."""

    start_date: dt.date
    end_date: dt.date | None = None
    dose_times: list[TimeOfDay] = Field(min_length=1, max_length=12)

    @model_validator(mode="after")
    def _limit_span(self) -> "MedicationOrderCreate":
        _check_span(self.start_date, self.end_date)
        return self


class MedicationRecordCreated(BaseModel):
    """Identifier of a newly scheduled dose."""

    id: uuid.UUID


class MedicationRangeCreated(BaseModel):
    """Outcome of a date-range scheduling request."""

    success: bool = True
    created: int


class MedicationOrderCreated(BaseModel):
    """Records produced by a treatment order."""

    ids: list[uuid.UUID]
    group_id: str | None = None


class MedicationRecordRead(BaseModel):
    """Serialized medication record."""

    id: uuid.UUID
    animal_id: uuid.UUID
    date: dt.date
    end_date: dt.date | None = None
    time: str
    medication: str
    dose: str
    administered: bool
    observations: str | None = None
    administered_by: uuid.UUID | None = None
    group_id: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class MedicationRecordWithAnimal(MedicationRecordRead):
    """Medication record joined with its animal."""

    animal: AnimalSummary | None = None


class MedicationGroupRead(BaseModel):
    """Records that are edited together, or a single ungrouped record."""

    key: str
    group_id: str | None = None
    records: list[MedicationRecordRead]


class MedicationBoardSection(BaseModel):
    """All doses due at one time of day."""

    time: str
    collapsed: bool
    pending: int
    records: list[MedicationRecordWithAnimal]


class AdministerRequest(BaseModel):
    """Optional notes captured when a dose is given."""

    observations: str | None = Field(default=None, max_length=2048)


class MedicationBatchChanges(BaseModel):
    """Fields applied uniformly to every record in a batch; blanks are ignored."""

    date: dt.date | None = None
    end_date: dt.date | None = None
    time: TimeOfDay | None = None
    medication: str | None = Field(default=None, max_length=255)
    dose: str | None = Field(default=None, max_length=120)
    observations: str | None = Field(default=None, max_length=2048)

    @field_validator("time", "medication", "dose", "observations", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _require_change(self) -> "MedicationBatchChanges":
        if not self.as_changes():
            raise ValueError("At least one field must be provided")
        if (
            self.date is not None
            and self.end_date is not None
            and self.end_date < self.date
        ):
            raise ValueError("end_date must not be before date")
        return self

    def as_changes(self) -> dict[str, Any]:
        """Return the provided fields as a column/value mapping."""
        return {key: value for key, value in self.model_dump().items() if value is not None}


class BatchIdsRequest(BaseModel):
    """Explicit set of medication record ids."""

    ids: list[uuid.UUID]


class BatchUpdateRequest(BatchIdsRequest):
    """Batch field update."""

    updates: MedicationBatchChanges


class BatchAdministerRequest(BatchIdsRequest):
    """Batch administration with shared notes."""

    observations: str | None = Field(default=None, max_length=2048)


class BatchUpdateResult(BaseModel):
    """Number of records changed by a batch."""

    updated: int


class BatchDeleteResult(BaseModel):
    """Number of records removed by a batch."""

    deleted: int
