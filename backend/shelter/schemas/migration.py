"""Legacy migration result schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MigrationStatsRead(BaseModel):
    """Counters for one migrated table."""

    name: str
    processed: int
    created: int
    skipped: int
    warnings: list[str]

    model_config = ConfigDict(from_attributes=True)


class MigrationSummaryRead(BaseModel):
    """Outcome of a legacy migration run."""

    animals: MigrationStatsRead
    medication_records: MigrationStatsRead

    model_config = ConfigDict(from_attributes=True)
