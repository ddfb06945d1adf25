"""Domain errors raised by shelter services and mapped to HTTP responses by the API."""

from __future__ import annotations

import uuid


class UnauthenticatedError(PermissionError):
    """Raised when a mutation is attempted without a caller identity."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class NotFoundError(LookupError):
    """Raised when an id does not resolve to a stored row."""

    def __init__(self, message: str, *, entity_id: uuid.UUID | None = None) -> None:
        super().__init__(message)
        self.entity_id = entity_id


class AnimalNotFoundError(NotFoundError):
    """Raised when an animal is missing or deactivated; both look the same to callers."""

    def __init__(self, animal_id: uuid.UUID | None = None) -> None:
        super().__init__("Animal not found", entity_id=animal_id)


class MedicationNotFoundError(NotFoundError):
    """Raised when a medication record id does not resolve."""

    def __init__(self, record_id: uuid.UUID | None = None) -> None:
        super().__init__("Medication record not found", entity_id=record_id)


def require_caller(caller_id: uuid.UUID | None) -> uuid.UUID:
    """Return the caller id or raise UnauthenticatedError."""
    if caller_id is None:
        raise UnauthenticatedError()
    return caller_id


__all__ = [
    "AnimalNotFoundError",
    "MedicationNotFoundError",
    "NotFoundError",
    "UnauthenticatedError",
    "require_caller",
]
