"""Medication scheduling, administration and batch API."""
from __future__ import annotations

import datetime as dt
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api import deps
from shelter.schemas.medication import (
    AdministerRequest,
    BatchAdministerRequest,
    BatchDeleteResult,
    BatchIdsRequest,
    BatchUpdateRequest,
    BatchUpdateResult,
    MedicationBoardSection,
    MedicationOrderCreate,
    MedicationOrderCreated,
    MedicationRangeCreate,
    MedicationRangeCreated,
    MedicationRecordCreate,
    MedicationRecordCreated,
    MedicationRecordWithAnimal,
)
from shelter.services import medication_batch_service, medication_service
from shelter.services.errors import NotFoundError, UnauthenticatedError

router = APIRouter(prefix="/medications")

_DOMAIN_ERRORS = (UnauthenticatedError, NotFoundError)


def _today() -> dt.date:
    return dt.date.today()


@router.post(
    "",
    response_model=MedicationRecordCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a single dose",
)
async def add_medication(
    payload: MedicationRecordCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> MedicationRecordCreated:
    try:
        record_id = await medication_service.add_single(
            session, payload, caller_id=caller_id
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc
    return MedicationRecordCreated(id=record_id)


@router.post(
    "/range",
    response_model=MedicationRangeCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule one dose per day over a date range",
)
async def add_medication_range(
    payload: MedicationRangeCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> MedicationRangeCreated:
    try:
        created = await medication_service.add_range(
            session, payload, caller_id=caller_id
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc
    return MedicationRangeCreated(success=True, created=created)


@router.post(
    "/orders",
    response_model=MedicationOrderCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Schedule a treatment with one or more daily dose times",
)
async def schedule_order(
    payload: MedicationOrderCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> MedicationOrderCreated:
    try:
        ids, group_id = await medication_service.schedule_order(
            session, payload, caller_id=caller_id
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc
    return MedicationOrderCreated(ids=ids, group_id=group_id)


@router.get(
    "",
    response_model=list[MedicationRecordWithAnimal],
    summary="List doses due on a date",
)
async def list_medications_for_date(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
    date: dt.date | None = Query(default=None),
) -> list[MedicationRecordWithAnimal]:
    """Return doses for active animals on a date (today by default), by time."""
    records = await medication_service.list_by_date(
        session, caller_id=caller_id, target_date=date or _today()
    )
    return [MedicationRecordWithAnimal.model_validate(record) for record in records]


@router.get(
    "/board",
    response_model=list[MedicationBoardSection],
    summary="Daily medication board grouped by time of day",
)
async def medication_board(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
    date: dt.date | None = Query(default=None),
    current_hour: int | None = Query(default=None, ge=0, le=23),
) -> list[MedicationBoardSection]:
    target_date = date or _today()
    if current_hour is None and target_date == _today():
        current_hour = dt.datetime.now().hour
    sections = await medication_service.daily_board(
        session,
        caller_id=caller_id,
        target_date=target_date,
        current_hour=current_hour,
    )
    return [
        MedicationBoardSection(
            time=section.time,
            collapsed=section.collapsed,
            pending=section.pending,
            records=[
                MedicationRecordWithAnimal.model_validate(record)
                for record in section.records
            ],
        )
        for section in sections
    ]


@router.get(
    "/groups/{group_id}",
    response_model=list[MedicationRecordWithAnimal],
    summary="List the doses of a treatment group",
)
async def list_medications_for_group(
    group_id: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> list[MedicationRecordWithAnimal]:
    records = await medication_service.list_by_group(
        session, caller_id=caller_id, group_id=group_id
    )
    return [MedicationRecordWithAnimal.model_validate(record) for record in records]


@router.delete(
    "/groups/{group_id}",
    response_model=BatchDeleteResult,
    summary="Delete every dose of a treatment group",
)
async def delete_medication_group(
    group_id: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> BatchDeleteResult:
    try:
        deleted = await medication_batch_service.batch_delete_by_group(
            session, caller_id=caller_id, group_id=group_id
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc
    return BatchDeleteResult(deleted=deleted)


@router.post(
    "/batch/update",
    response_model=BatchUpdateResult,
    summary="Apply the same changes to several doses",
)
async def batch_update(
    payload: BatchUpdateRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> BatchUpdateResult:
    try:
        updated = await medication_batch_service.batch_update(
            session,
            caller_id=caller_id,
            ids=payload.ids,
            changes=payload.updates.as_changes(),
        )
    except (*_DOMAIN_ERRORS, ValueError) as exc:
        raise deps.translate_domain_error(exc) from exc
    return BatchUpdateResult(updated=updated)


@router.post(
    "/batch/delete",
    response_model=BatchDeleteResult,
    summary="Delete several doses",
)
async def batch_delete(
    payload: BatchIdsRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> BatchDeleteResult:
    try:
        deleted = await medication_batch_service.batch_delete(
            session, caller_id=caller_id, ids=payload.ids
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc
    return BatchDeleteResult(deleted=deleted)


@router.post(
    "/batch/administer",
    response_model=BatchUpdateResult,
    summary="Mark several doses as administered",
)
async def batch_administer(
    payload: BatchAdministerRequest,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> BatchUpdateResult:
    try:
        updated = await medication_batch_service.batch_mark_administered(
            session,
            caller_id=caller_id,
            ids=payload.ids,
            observations=payload.observations,
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc
    return BatchUpdateResult(updated=updated)


@router.post(
    "/{record_id}/administer",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Mark a dose as administered",
)
async def administer_medication(
    record_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
    payload: AdministerRequest | None = None,
) -> None:
    observations = payload.observations if payload is not None else None
    try:
        await medication_service.mark_administered(
            session,
            caller_id=caller_id,
            record_id=record_id,
            observations=observations,
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc


@router.post(
    "/{record_id}/undo",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Undo a dose administration",
)
async def undo_administration(
    record_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> None:
    try:
        await medication_service.undo_administration(
            session, caller_id=caller_id, record_id=record_id
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc


@router.delete(
    "/{record_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a dose",
)
async def delete_medication(
    record_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    caller_id: Annotated[uuid.UUID | None, Depends(deps.get_caller_id)],
) -> None:
    try:
        await medication_service.delete_medication(
            session, caller_id=caller_id, record_id=record_id
        )
    except _DOMAIN_ERRORS as exc:
        raise deps.translate_domain_error(exc) from exc
