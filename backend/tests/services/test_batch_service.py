"""Batch operation tests."""

from __future__ import annotations

import datetime as dt
import uuid

import pytest
from sqlalchemy import func, select

from shelter.models import MedicationRecord
from shelter.schemas.medication import MedicationRangeCreate
from shelter.services import medication_batch_service, medication_service
from shelter.services.errors import (
    AnimalNotFoundError,
    MedicationNotFoundError,
    UnauthenticatedError,
)

pytestmark = pytest.mark.asyncio


async def _schedule_days(
    session, caretaker, animal, days: int = 3, **extra
) -> list[MedicationRecord]:
    start = dt.date(2024, 1, 1)
    await medication_service.add_range(
        session,
        MedicationRangeCreate(
            animal_id=animal.id,
            start_date=start,
            end_date=start + dt.timedelta(days=days - 1),
            time="08:00",
            medication="Amoxicillin",
            dose="50mg",
            **extra,
        ),
        caller_id=caretaker.id,
    )
    result = await session.execute(
        select(MedicationRecord)
        .where(MedicationRecord.animal_id == animal.id)
        .order_by(MedicationRecord.date)
    )
    return list(result.scalars().all())


async def _count(session) -> int:
    return (await session.execute(select(func.count(MedicationRecord.id)))).scalar_one()


async def test_batch_update_applies_changes(session, caretaker, make_animal) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal)

    updated = await medication_batch_service.batch_update(
        session,
        caller_id=caretaker.id,
        ids=[record.id for record in records[:2]],
        changes={"dose": "75mg", "time": "09:30"},
    )

    assert updated == 2
    assert [record.dose for record in records] == ["75mg", "75mg", "50mg"]
    assert [record.time for record in records] == ["09:30", "09:30", "08:00"]


async def test_batch_update_collapses_duplicate_ids(session, caretaker, make_animal) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal, days=1)

    updated = await medication_batch_service.batch_update(
        session,
        caller_id=caretaker.id,
        ids=[records[0].id, records[0].id],
        changes={"medication": "Doxycycline"},
    )

    assert updated == 1


async def test_batch_update_rejects_unknown_fields(session, caretaker, make_animal) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal, days=1)

    with pytest.raises(ValueError):
        await medication_batch_service.batch_update(
            session,
            caller_id=caretaker.id,
            ids=[records[0].id],
            changes={"administered": True},
        )


async def test_batch_update_validates_before_writing(session, caretaker, make_animal) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal)

    with pytest.raises(MedicationNotFoundError):
        await medication_batch_service.batch_update(
            session,
            caller_id=caretaker.id,
            ids=[records[0].id, uuid.uuid4(), records[1].id],
            changes={"dose": "99mg"},
        )

    await session.rollback()
    for record in records:
        await session.refresh(record)
    assert [record.dose for record in records] == ["50mg", "50mg", "50mg"]


async def test_batch_delete_stops_on_inactive_animal(
    session, caretaker, make_animal
) -> None:
    active = await make_animal(name="Active")
    retired = await make_animal(name="Retired")
    kept = await _schedule_days(session, caretaker, active, days=2)
    blocked = await _schedule_days(session, caretaker, retired, days=1)
    retired.active = False
    await session.commit()

    with pytest.raises(AnimalNotFoundError):
        await medication_batch_service.batch_delete(
            session,
            caller_id=caretaker.id,
            ids=[kept[0].id, blocked[0].id, kept[1].id],
        )

    assert await _count(session) == 3


async def test_batch_delete_removes_records(session, caretaker, make_animal) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal)

    deleted = await medication_batch_service.batch_delete(
        session, caller_id=caretaker.id, ids=[record.id for record in records[1:]]
    )

    assert deleted == 2
    assert await _count(session) == 1


async def test_batch_mark_administered(session, caretaker, make_animal) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal)

    updated = await medication_batch_service.batch_mark_administered(
        session,
        caller_id=caretaker.id,
        ids=[record.id for record in records],
        observations="morning round",
    )

    assert updated == 3
    assert all(record.administered for record in records)
    assert {record.administered_by for record in records} == {caretaker.id}
    assert {record.observations for record in records} == {"morning round"}


async def test_batch_delete_by_group(session, caretaker, make_animal) -> None:
    animal = await make_animal()
    await _schedule_days(session, caretaker, animal, group_id="course-1")
    await _schedule_days(session, caretaker, animal, days=1)

    deleted = await medication_batch_service.batch_delete_by_group(
        session, caller_id=caretaker.id, group_id="course-1"
    )

    assert deleted == 3
    assert await _count(session) == 1
    assert (
        await medication_batch_service.batch_delete_by_group(
            session, caller_id=caretaker.id, group_id="missing"
        )
        == 0
    )


async def test_batches_require_caller(session, caretaker, make_animal) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal, days=1)
    ids = [records[0].id]

    with pytest.raises(UnauthenticatedError):
        await medication_batch_service.batch_update(
            session, caller_id=None, ids=ids, changes={"dose": "1mg"}
        )
    with pytest.raises(UnauthenticatedError):
        await medication_batch_service.batch_delete(session, caller_id=None, ids=ids)
    with pytest.raises(UnauthenticatedError):
        await medication_batch_service.batch_mark_administered(
            session, caller_id=None, ids=ids
        )
    with pytest.raises(UnauthenticatedError):
        await medication_batch_service.batch_delete_by_group(
            session, caller_id=None, group_id="any"
        )


async def test_batch_delete_by_group_keeps_group_with_inactive_animal(
    session, caretaker, make_animal
) -> None:
    active = await make_animal(name="Active")
    retired = await make_animal(name="Retired")
    await _schedule_days(session, caretaker, active, days=2, group_id="G")
    await _schedule_days(session, caretaker, retired, days=2, group_id="G")
    retired.active = False
    await session.commit()

    with pytest.raises(AnimalNotFoundError):
        await medication_batch_service.batch_delete_by_group(
            session, caller_id=caretaker.id, group_id="G"
        )

    assert await _count(session) == 4


async def test_batch_mark_administered_validates_before_writing(
    session, caretaker, make_animal
) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal)

    with pytest.raises(MedicationNotFoundError):
        await medication_batch_service.batch_mark_administered(
            session,
            caller_id=caretaker.id,
            ids=[records[0].id, records[1].id, uuid.uuid4()],
            observations="should not stick",
        )

    await session.rollback()
    for record in records:
        await session.refresh(record)
    assert [record.administered for record in records] == [False, False, False]
    assert {record.administered_by for record in records} == {None}


async def test_batch_update_rejects_date_past_end_date(
    session, caretaker, make_animal
) -> None:
    animal = await make_animal()
    records = await _schedule_days(session, caretaker, animal)

    with pytest.raises(ValueError):
        await medication_batch_service.batch_update(
            session,
            caller_id=caretaker.id,
            ids=[record.id for record in records],
            changes={"date": dt.date(2024, 2, 1)},
        )

    await session.rollback()
    for record in records:
        await session.refresh(record)
    assert [record.date for record in records] == [
        dt.date(2024, 1, 1),
        dt.date(2024, 1, 2),
        dt.date(2024, 1, 3),
    ]
