"""Medication scheduling, administration tracking and medication queries."""
from __future__ import annotations

import datetime as dt
import logging
import uuid
from collections.abc import Iterator

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from shelter.models.animal import Animal
from shelter.models.medication_record import MedicationRecord
from shelter.schemas.medication import (
    MedicationOrderCreate,
    MedicationRangeCreate,
    MedicationRecordCreate,
    MedicationTemplate,
)
from shelter.services import medication_grouping
from shelter.services.animal_service import ensure_active_animal, get_active_animal
from shelter.services.errors import MedicationNotFoundError, require_caller

logger = logging.getLogger(__name__)

_ONE_DAY = dt.timedelta(days=1)


def iter_days(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    """Yield each calendar day from start to end inclusive; nothing when start > end."""
    current = start
    while current <= end:
        yield current
        current += _ONE_DAY


def new_group_id() -> str:
    """Return a fresh token linking records that belong to one treatment order."""
    return uuid.uuid4().hex


def _build_record(
    template: MedicationTemplate,
    *,
    day: dt.date,
    time: str,
    end_date: dt.date | None,
    group_id: str | None,
) -> MedicationRecord:
    return MedicationRecord(
        animal_id=template.animal_id,
        date=day,
        end_date=end_date,
        time=time,
        medication=template.medication,
        dose=template.dose,
        observations=template.observations,
        group_id=group_id,
        administered=False,
    )


# Scheduling


async def add_single(
    session: AsyncSession,
    payload: MedicationRecordCreate,
    *,
    caller_id: uuid.UUID | None,
) -> uuid.UUID:
    """Schedule one pending dose for an active animal."""
    require_caller(caller_id)
    await ensure_active_animal(session, payload.animal_id)
    record = _build_record(
        payload,
        day=payload.date,
        time=payload.time,
        end_date=payload.end_date,
        group_id=payload.group_id,
    )
    session.add(record)
    await session.commit()
    return record.id


async def _insert_range(
    session: AsyncSession,
    template: MedicationTemplate,
    *,
    start_date: dt.date,
    end_date: dt.date,
    time: str,
    group_id: str | None,
) -> list[MedicationRecord]:
    records = [
        _build_record(
            template, day=day, time=time, end_date=end_date, group_id=group_id
        )
        for day in iter_days(start_date, end_date)
    ]
    session.add_all(records)
    await session.flush()
    return records


async def add_range(
    session: AsyncSession,
    payload: MedicationRangeCreate,
    *,
    caller_id: uuid.UUID | None,
) -> int:
    """Schedule one pending dose per day from start_date to end_date inclusive.

    An inverted range is not an error: nothing is inserted and 0 is returned.
    """
    require_caller(caller_id)
    await ensure_active_animal(session, payload.animal_id)
    records = await _insert_range(
        session,
        payload,
        start_date=payload.start_date,
        end_date=payload.end_date,
        time=payload.time,
        group_id=payload.group_id,
    )
    await session.commit()
    return len(records)


async def schedule_order(
    session: AsyncSession,
    payload: MedicationOrderCreate,
    *,
    caller_id: uuid.UUID | None,
) -> tuple[list[uuid.UUID], str | None]:
    """Schedule every dose time of a treatment, sharing one group id.

    Each dose time is expanded on its own, exactly as separate single or range
    requests would be. A group id is generated when the caller did not supply
    one and the order produces more than one record.
    """
    require_caller(caller_id)
    await ensure_active_animal(session, payload.animal_id)

    end_date = payload.end_date
    days = 1 if end_date is None else len(list(iter_days(payload.start_date, end_date)))
    group_id = payload.group_id
    if group_id is None and days * len(payload.dose_times) > 1:
        group_id = new_group_id()

    ids: list[uuid.UUID] = []
    for time in payload.dose_times:
        if end_date is None:
            record = _build_record(
                payload,
                day=payload.start_date,
                time=time,
                end_date=None,
                group_id=group_id,
            )
            session.add(record)
            await session.flush()
            ids.append(record.id)
        else:
            records = await _insert_range(
                session,
                payload,
                start_date=payload.start_date,
                end_date=end_date,
                time=time,
                group_id=group_id,
            )
            ids.extend(record.id for record in records)
    await session.commit()
    logger.info(
        "Scheduled %s %s dose(s) for animal %s (group %s)",
        len(ids),
        payload.medication,
        payload.animal_id,
        group_id,
    )
    return ids, group_id


# Administration


async def load_record_for_change(
    session: AsyncSession, record_id: uuid.UUID
) -> MedicationRecord:
    """Return a record whose animal is active, raising the matching not-found error."""
    record = await session.get(MedicationRecord, record_id)
    if record is None:
        raise MedicationNotFoundError(record_id)
    await ensure_active_animal(session, record.animal_id)
    return record


async def mark_administered(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    record_id: uuid.UUID,
    observations: str | None = None,
) -> MedicationRecord:
    """Mark a dose as given by the caller, overwriting any previous observations."""
    administered_by = require_caller(caller_id)
    record = await load_record_for_change(session, record_id)
    record.administered = True
    record.administered_by = administered_by
    record.observations = observations
    await session.commit()
    return record


async def undo_administration(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    record_id: uuid.UUID,
) -> MedicationRecord:
    """Return a dose to pending; administrator and observations are cleared."""
    require_caller(caller_id)
    record = await load_record_for_change(session, record_id)
    record.administered = False
    record.administered_by = None
    record.observations = None
    await session.commit()
    return record


async def delete_medication(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    record_id: uuid.UUID,
) -> None:
    """Delete a single scheduled dose."""
    require_caller(caller_id)
    record = await load_record_for_change(session, record_id)
    await session.delete(record)
    await session.commit()


# Queries


def _with_active_animal() -> Select[tuple[MedicationRecord]]:
    return (
        select(MedicationRecord)
        .join(MedicationRecord.animal)
        .options(contains_eager(MedicationRecord.animal))
        .where(Animal.active.is_(True))
    )


async def list_by_animal(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    animal_id: uuid.UUID,
) -> list[MedicationRecord]:
    """Return an animal's records, newest date first."""
    if caller_id is None:
        return []
    if await get_active_animal(session, animal_id) is None:
        return []
    stmt = (
        select(MedicationRecord)
        .where(MedicationRecord.animal_id == animal_id)
        .order_by(
            MedicationRecord.date.desc(),
            MedicationRecord.time.desc(),
            MedicationRecord.created_at.desc(),
        )
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_by_date(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    target_date: dt.date,
) -> list[MedicationRecord]:
    """Return doses due on a date for active animals, ordered by time of day."""
    if caller_id is None:
        return []
    stmt = (
        _with_active_animal()
        .where(MedicationRecord.date == target_date)
        .order_by(MedicationRecord.time, MedicationRecord.created_at)
    )
    result = await session.execute(stmt)
    return list(result.scalars().unique().all())


async def list_by_group(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    group_id: str,
) -> list[MedicationRecord]:
    """Return the records of one treatment group ordered by date then time."""
    if caller_id is None:
        return []
    stmt = (
        _with_active_animal()
        .where(MedicationRecord.group_id == group_id)
        .order_by(
            MedicationRecord.date, MedicationRecord.time, MedicationRecord.created_at
        )
    )
    result = await session.execute(stmt)
    return list(result.scalars().unique().all())


async def daily_board(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    target_date: dt.date,
    current_hour: int | None = None,
) -> list[medication_grouping.TimeSection]:
    """Return a date's doses split into time-of-day sections."""
    records = await list_by_date(session, caller_id=caller_id, target_date=target_date)
    return medication_grouping.group_by_time(records, current_hour=current_hour)


async def groups_for_animal(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    animal_id: uuid.UUID,
) -> list[medication_grouping.RecordGroup]:
    """Return an animal's records partitioned into treatment groups."""
    records = await list_by_animal(session, caller_id=caller_id, animal_id=animal_id)
    return medication_grouping.group_records(records)
