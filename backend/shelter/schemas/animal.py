"""Pydantic schemas for shelter animals."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from shelter.models.animal import AnimalSex


class AnimalFields(BaseModel):
    """Every mutable animal attribute; create and update both send the full set."""

    name: str = Field(min_length=1, max_length=120)
    sex: AnimalSex
    coat: str = Field(max_length=120)
    age: str = Field(max_length=60)
    owner_name: str = Field(max_length=240)
    treatment_for: str = Field(max_length=1024)
    treatment: str = Field(max_length=1024)
    fiv: bool = False
    felv: bool = False
    rabies: bool = False
    v6: bool = False


class AnimalCreate(AnimalFields):
    """Payload for registering an animal."""

    pass


class AnimalUpdate(AnimalFields):
    """Payload replacing an animal's attributes."""

    pass


class AnimalCreated(BaseModel):
    """Identifier of a newly registered animal."""

    id: uuid.UUID


class AnimalRead(BaseModel):
    """Serialized animal."""

    id: uuid.UUID
    name: str
    sex: AnimalSex
    coat: str
    age: str
    owner_name: str
    treatment_for: str
    treatment: str
    fiv: bool | None = None
    felv: bool | None = None
    rabies: bool | None = None
    v6: bool | None = None
    active: bool
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AnimalSummary(BaseModel):
    """Animal fields shown next to a medication record."""

    id: uuid.UUID
    name: str
    sex: AnimalSex
    coat: str
    age: str
    owner_name: str
    treatment_for: str
    treatment: str

    model_config = ConfigDict(from_attributes=True)
