"""ORM models package export."""

from shelter.models.animal import Animal, AnimalSex
from shelter.models.legacy import LEGACY_FEMALE, LegacyAnimal, LegacyMedicationRecord
from shelter.models.medication_record import MedicationRecord
from shelter.models.user import User, UserStatus

__all__ = [
    "Animal",
    "AnimalSex",
    "LEGACY_FEMALE",
    "LegacyAnimal",
    "LegacyMedicationRecord",
    "MedicationRecord",
    "User",
    "UserStatus",
]
