"""Batch operations over sets of medication records.

Every operation runs in two phases. The validation phase loads all records and
checks each one still belongs to an active animal; any failure aborts before a
single row changes. The apply phase then issues one statement per record with
no compensation step, so a storage failure part way through may leave the
batch partially applied.
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.models.medication_record import MedicationRecord
from shelter.services.errors import require_caller
from shelter.services.medication_service import load_record_for_change

logger = logging.getLogger(__name__)

BATCH_FIELDS = frozenset(
    {"date", "end_date", "time", "medication", "dose", "observations"}
)


def _unique(ids: Iterable[uuid.UUID]) -> list[uuid.UUID]:
    return list(dict.fromkeys(ids))


async def _validate_all(
    session: AsyncSession, ids: Iterable[uuid.UUID]
) -> list[MedicationRecord]:
    return [await load_record_for_change(session, record_id) for record_id in _unique(ids)]


def _check_dates(record: MedicationRecord, changes: dict[str, Any]) -> None:
    date = changes.get("date", record.date)
    end_date = changes.get("end_date", record.end_date)
    if end_date is not None and end_date < date:
        raise ValueError(f"Record {record.id} would end before its date")


async def batch_update(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    ids: Iterable[uuid.UUID],
    changes: dict[str, Any],
) -> int:
    """Apply the same field changes to every record; returns the number updated."""
    require_caller(caller_id)
    unknown = set(changes) - BATCH_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be batch updated: {', '.join(sorted(unknown))}")
    records = await _validate_all(session, ids)
    for record in records:
        _check_dates(record, changes)

    for record in records:
        for field, value in changes.items():
            setattr(record, field, value)
        await session.flush()
    await session.commit()
    logger.info("Batch updated %s medication record(s): %s", len(records), sorted(changes))
    return len(records)


async def batch_delete(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    ids: Iterable[uuid.UUID],
) -> int:
    """Delete every listed record; returns the number deleted."""
    require_caller(caller_id)
    records = await _validate_all(session, ids)

    for record in records:
        await session.delete(record)
    await session.commit()
    logger.info("Batch deleted %s medication record(s)", len(records))
    return len(records)


async def batch_mark_administered(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    ids: Iterable[uuid.UUID],
    observations: str | None = None,
) -> int:
    """Mark every listed record as given by the caller with the same observations."""
    administered_by = require_caller(caller_id)
    records = await _validate_all(session, ids)

    for record in records:
        record.administered = True
        record.administered_by = administered_by
        record.observations = observations
    await session.commit()
    logger.info("Batch administered %s medication record(s)", len(records))
    return len(records)


async def batch_delete_by_group(
    session: AsyncSession,
    *,
    caller_id: uuid.UUID | None,
    group_id: str,
) -> int:
    """Delete every record sharing a group id; an unknown group deletes nothing."""
    require_caller(caller_id)
    result = await session.execute(
        select(MedicationRecord.id).where(MedicationRecord.group_id == group_id)
    )
    records = await _validate_all(session, result.scalars().all())

    for record in records:
        await session.delete(record)
    await session.commit()
    logger.info("Deleted group %s (%s record(s))", group_id, len(records))
    return len(records)
