"""Animal registry service tests."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import text

from shelter.models import Animal, AnimalSex
from shelter.schemas.animal import AnimalCreate, AnimalUpdate
from shelter.services import animal_service
from shelter.services.errors import NotFoundError, UnauthenticatedError

pytestmark = pytest.mark.asyncio


def _payload(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "name": "Mimi",
        "sex": AnimalSex.FEMALE,
        "coat": "Calico",
        "age": "3 months",
        "owner_name": "Ana",
        "treatment_for": "Conjunctivitis",
        "treatment": "Eye drops",
    }
    data.update(overrides)
    return data


async def test_add_animal_sets_creator_and_active(session, caretaker) -> None:
    animal_id = await animal_service.add_animal(
        session, AnimalCreate(**_payload(fiv=True)), caller_id=caretaker.id
    )

    animal = await session.get(Animal, animal_id)
    assert animal is not None
    assert animal.active is True
    assert animal.created_by == caretaker.id
    assert animal.fiv is True
    assert animal.felv is False


async def test_add_animal_requires_caller(session, caretaker) -> None:
    with pytest.raises(UnauthenticatedError):
        await animal_service.add_animal(session, AnimalCreate(**_payload()), caller_id=None)


async def test_add_animal_allows_duplicates(session, caretaker) -> None:
    first = await animal_service.add_animal(
        session, AnimalCreate(**_payload()), caller_id=caretaker.id
    )
    second = await animal_service.add_animal(
        session, AnimalCreate(**_payload()), caller_id=caretaker.id
    )
    assert first != second
    animals = await animal_service.list_animals(session, caller_id=caretaker.id)
    assert len(animals) == 2


async def test_inactive_animals_are_hidden(session, caretaker, make_animal) -> None:
    visible = await make_animal(name="Visible")
    hidden = await make_animal(name="Hidden")

    await animal_service.deactivate_animal(
        session, caller_id=caretaker.id, animal_id=hidden.id
    )

    listed = await animal_service.list_animals(session, caller_id=caretaker.id)
    assert [animal.id for animal in listed] == [visible.id]
    assert (
        await animal_service.get_animal(session, caller_id=caretaker.id, animal_id=hidden.id)
        is None
    )
    assert (
        await animal_service.get_animal(session, caller_id=caretaker.id, animal_id=visible.id)
    ).id == visible.id


async def test_anonymous_queries_degrade_to_empty(session, make_animal) -> None:
    animal = await make_animal()

    assert await animal_service.list_animals(session, caller_id=None) == []
    assert await animal_service.get_animal(session, caller_id=None, animal_id=animal.id) is None


async def test_update_replaces_fields_even_when_inactive(
    session, caretaker, make_animal
) -> None:
    animal = await make_animal(active=False)

    await animal_service.update_animal(
        session,
        AnimalUpdate(**_payload(name="Renamed", rabies=True)),
        caller_id=caretaker.id,
        animal_id=animal.id,
    )

    refreshed = await session.get(Animal, animal.id)
    assert refreshed.name == "Renamed"
    assert refreshed.sex == AnimalSex.FEMALE
    assert refreshed.rabies is True
    assert refreshed.active is False


async def test_update_and_deactivate_unknown_animal(session, caretaker) -> None:
    missing = uuid.uuid4()
    with pytest.raises(NotFoundError):
        await animal_service.update_animal(
            session, AnimalUpdate(**_payload()), caller_id=caretaker.id, animal_id=missing
        )
    with pytest.raises(NotFoundError):
        await animal_service.deactivate_animal(
            session, caller_id=caretaker.id, animal_id=missing
        )


async def test_deactivate_requires_caller(session, make_animal) -> None:
    animal = await make_animal()
    with pytest.raises(UnauthenticatedError):
        await animal_service.deactivate_animal(session, caller_id=None, animal_id=animal.id)
    assert animal.active is True


async def test_sex_is_stored_with_shelter_values(session, caretaker) -> None:
    await animal_service.add_animal(
        session, AnimalCreate(**_payload(sex=AnimalSex.FEMALE)), caller_id=caretaker.id
    )
    await animal_service.add_animal(
        session, AnimalCreate(**_payload(sex=AnimalSex.MALE)), caller_id=caretaker.id
    )

    stored = (await session.execute(text("SELECT sex FROM animals ORDER BY sex"))).scalars()
    assert list(stored) == ["Femea", "Macho"]
