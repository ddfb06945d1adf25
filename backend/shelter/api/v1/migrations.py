"""Administrative endpoint running the legacy data migration."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api import deps
from shelter.models.user import User
from shelter.schemas.migration import MigrationSummaryRead
from shelter.services import migration_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/migrations")


@router.post(
    "/legacy",
    response_model=MigrationSummaryRead,
    summary="Copy legacy Portuguese records into the current tables (run once)",
)
async def run_legacy_migration(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> MigrationSummaryRead:
    logger.info("Legacy migration started by %s", current_user.id)
    summary = await migration_service.run_migration(session)
    return MigrationSummaryRead.model_validate(summary)
