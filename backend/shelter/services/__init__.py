"""Service layer exports."""
from shelter.services import (
    animal_service,
    auth_service,
    medication_batch_service,
    medication_grouping,
    medication_service,
    migration_service,
    user_service,
)

__all__ = [
    "animal_service",
    "auth_service",
    "medication_batch_service",
    "medication_grouping",
    "medication_service",
    "migration_service",
    "user_service",
]
