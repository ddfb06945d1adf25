"""Animal registry service helpers."""

from __future__ import annotations

import uuid
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.models.animal import Animal
from shelter.schemas.animal import AnimalCreate, AnimalUpdate
from shelter.services.errors import AnimalNotFoundError, require_caller


async def get_active_animal(session: AsyncSession, animal_id: uuid.UUID) -> Animal | None:
    """Return the animal when it exists and has not been deactivated."""
    animal = await session.get(Animal, animal_id)
    if animal is None or not animal.active:
        return None
    return animal


async def ensure_active_animal(session: AsyncSession, animal_id: uuid.UUID) -> Animal:
    """Return the active animal or raise AnimalNotFoundError."""
    animal = await get_active_animal(session, animal_id)
    if animal is None:
        raise AnimalNotFoundError(animal_id)
    return animal


async def add_animal(
    session: AsyncSession,
    payload: AnimalCreate,
    *,
    caller_id: uuid.UUID | None,
) -> uuid.UUID:
    """Register an animal created by the caller; no duplicate check is made."""
    created_by = require_caller(caller_id)
    animal = Animal(**payload.model_dump(), active=True, created_by=created_by)
    session.add(animal)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    return animal.id


async def list_animals(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
) -> Sequence[Animal]:
    """Return active animals, or nothing when the caller is anonymous."""
    if caller_id is None:
        return []
    result = await session.execute(
        select(Animal).where(Animal.active.is_(True)).order_by(Animal.created_at)
    )
    return result.scalars().all()


async def get_animal(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    animal_id: uuid.UUID,
) -> Animal | None:
    """Return an active animal; anonymous, missing and inactive all yield None."""
    if caller_id is None:
        return None
    return await get_active_animal(session, animal_id)


async def update_animal(
    session: AsyncSession,
    payload: AnimalUpdate,
    *,
    caller_id: uuid.UUID | None,
    animal_id: uuid.UUID,
) -> Animal:
    """Replace every mutable attribute of an existing (possibly inactive) animal."""
    require_caller(caller_id)
    animal = await session.get(Animal, animal_id)
    if animal is None:
        raise AnimalNotFoundError(animal_id)
    for field, value in payload.model_dump().items():
        setattr(animal, field, value)
    await session.commit()
    return animal


async def deactivate_animal(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    animal_id: uuid.UUID,
) -> None:
    """Soft delete an animal. Its medication records are left untouched."""
    require_caller(caller_id)
    animal = await session.get(Animal, animal_id)
    if animal is None:
        raise AnimalNotFoundError(animal_id)
    animal.active = False
    await session.commit()
