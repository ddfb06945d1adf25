"""Animal registry API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api import deps
from shelter.schemas.animal import AnimalCreate, AnimalCreated, AnimalRead, AnimalUpdate
from shelter.schemas.medication import MedicationGroupRead, MedicationRecordRead
from shelter.services import animal_service, medication_service
from shelter.services.errors import NotFoundError, UnauthenticatedError

router = APIRouter()


@router.get("", response_model=list[AnimalRead], summary="List active animals")
async def list_animals(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> list[AnimalRead]:
    """Return active animals; anonymous callers get an empty list."""
    animals = await animal_service.list_animals(session, caller_id=caller_id)
    return [AnimalRead.model_validate(animal) for animal in animals]


@router.post(
    "",
    response_model=AnimalCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Register animal",
)
async def add_animal(
    payload: AnimalCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> AnimalCreated:
    try:
        animal_id = await animal_service.add_animal(session, payload, caller_id=caller_id)
    except UnauthenticatedError as exc:
        raise deps.translate_domain_error(exc) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Unable to register animal"
        ) from exc
    return AnimalCreated(id=animal_id)


@router.get("/{animal_id}", response_model=AnimalRead | None, summary="Get animal")
async def get_animal(
    animal_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> AnimalRead | None:
    """Return the animal, or null when missing, deactivated or anonymous."""
    animal = await animal_service.get_animal(
        session, caller_id=caller_id, animal_id=animal_id
    )
    if animal is None:
        return None
    return AnimalRead.model_validate(animal)


@router.put(
    "/{animal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace animal details",
)
async def update_animal(
    animal_id: uuid.UUID,
    payload: AnimalUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> None:
    try:
        await animal_service.update_animal(
            session, payload, caller_id=caller_id, animal_id=animal_id
        )
    except (UnauthenticatedError, NotFoundError) as exc:
        raise deps.translate_domain_error(exc) from exc


@router.post(
    "/{animal_id}/deactivate",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate animal",
)
async def deactivate_animal(
    animal_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> None:
    try:
        await animal_service.deactivate_animal(
            session, caller_id=caller_id, animal_id=animal_id
        )
    except (UnauthenticatedError, NotFoundError) as exc:
        raise deps.translate_domain_error(exc) from exc


@router.get(
    "/{animal_id}/medications",
    response_model=list[MedicationRecordRead],
    summary="List an animal's medication records",
)
async def list_animal_medications(
    animal_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> list[MedicationRecordRead]:
    records = await medication_service.list_by_animal(
        session, caller_id=caller_id, animal_id=animal_id
    )
    return [MedicationRecordRead.model_validate(record) for record in records]


@router.get(
    "/{animal_id}/medication-groups",
    response_model=list[MedicationGroupRead],
    summary="List an animal's medication records by treatment group",
)
async def list_animal_medication_groups(
    animal_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> list[MedicationGroupRead]:
    groups = await medication_service.groups_for_animal(
        session, caller_id=caller_id, animal_id=animal_id
    )
    return [
        MedicationGroupRead(
            key=group.key,
            group_id=group.group_id,
            records=[MedicationRecordRead.model_validate(r) for r in group.records],
        )
        for group in groups
    ]
