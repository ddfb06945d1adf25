"""Schema exports."""

from shelter.schemas.animal import (
    AnimalCreate,
    AnimalCreated,
    AnimalRead,
    AnimalSummary,
    AnimalUpdate,
)
from shelter.schemas.auth import Token
from shelter.schemas.medication import (
    AdministerRequest,
    BatchAdministerRequest,
    BatchDeleteResult,
    BatchIdsRequest,
    BatchUpdateRequest,
    BatchUpdateResult,
    MedicationBatchChanges,
    MedicationBoardSection,
    MedicationGroupRead,
    MedicationOrderCreate,
    MedicationOrderCreated,
    MedicationRangeCreate,
    MedicationRangeCreated,
    MedicationRecordCreate,
    MedicationRecordCreated,
    MedicationRecordRead,
    MedicationRecordWithAnimal,
)
from shelter.schemas.migration import MigrationStatsRead, MigrationSummaryRead
from shelter.schemas.user import UserCreate, UserRead

__all__ = [
    "AnimalCreate",
    "AnimalCreated",
    "AnimalRead",
    "AnimalSummary",
    "AnimalUpdate",
    "Token",
    "AdministerRequest",
    "BatchAdministerRequest",
    "BatchDeleteResult",
    "BatchIdsRequest",
    "BatchUpdateRequest",
    "BatchUpdateResult",
    "MedicationBatchChanges",
    "MedicationBoardSection",
    "MedicationGroupRead",
    "MedicationOrderCreate",
    "MedicationOrderCreated",
    "MedicationRangeCreate",
    "MedicationRangeCreated",
    "MedicationRecordCreate",
    "MedicationRecordCreated",
    "MedicationRecordRead",
    "MedicationRecordWithAnimal",
    "MigrationStatsRead",
    "MigrationSummaryRead",
    "UserCreate",
    "UserRead",
]
