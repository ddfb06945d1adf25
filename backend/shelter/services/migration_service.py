"""One-shot copy of the legacy Portuguese tables into the current schema.

Animals are copied first. Medication records are then re-linked to the copied
animals by matching on (name, owner name, creator) rather than by id. When
several copied animals share those three values the earliest one wins. The
migration does not check for earlier runs; running it twice duplicates rows.
"""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.models.animal import Animal, AnimalSex
from shelter.models.legacy import LEGACY_FEMALE, LegacyAnimal, LegacyMedicationRecord
from shelter.models.medication_record import MedicationRecord

logger = logging.getLogger(__name__)


@dataclass
class MigrationStats:
    name: str
    processed: int = 0
    created: int = 0
    skipped: int = 0
    warnings: list[str] = field(default_factory=list)

    def skip(self, reason: str) -> None:
        self.processed += 1
        self.skipped += 1
        if len(self.warnings) < 50:
            self.warnings.append(reason)

    def create(self) -> None:
        self.processed += 1
        self.created += 1


@dataclass
class MigrationSummary:
    animals: MigrationStats
    medication_records: MigrationStats


def translate_sex(sexo: str) -> AnimalSex:
    """Map a legacy sex value; the accented female spelling is normalised.

    Values are compared in NFC so a decomposed accent matches too.
    """
    value = unicodedata.normalize("NFC", sexo.strip())
    if value == unicodedata.normalize("NFC", LEGACY_FEMALE):
        return AnimalSex.FEMALE
    return AnimalSex(value)


def animal_from_legacy(legacy: LegacyAnimal) -> Animal:
    """Build a current-schema animal from a legacy row."""
    return Animal(
        name=legacy.nome,
        sex=translate_sex(legacy.sexo),
        coat=legacy.pelagem,
        age=legacy.idade,
        owner_name=legacy.nome_tutor,
        treatment_for=legacy.tratamento_para,
        treatment=legacy.tratamento,
        fiv=legacy.fiv,
        felv=legacy.felv,
        rabies=legacy.raiva,
        v6=legacy.v6,
        active=legacy.ativo,
        created_by=legacy.created_by,
    )


async def migrate_animals(session: AsyncSession) -> MigrationStats:
    stats = MigrationStats(name="animals")
    result = await session.execute(
        select(LegacyAnimal).order_by(LegacyAnimal.created_at, LegacyAnimal.id)
    )
    for legacy in result.scalars().all():
        session.add(animal_from_legacy(legacy))
        await session.commit()
        stats.create()
    return stats


async def _match_animal(session: AsyncSession, legacy: LegacyAnimal) -> Animal | None:
    result = await session.execute(
        select(Animal)
        .where(
            Animal.name == legacy.nome,
            Animal.owner_name == legacy.nome_tutor,
            Animal.created_by == legacy.created_by,
        )
        .order_by(Animal.created_at, Animal.id)
        .limit(1)
    )
    return result.scalars().first()


async def migrate_medication_records(session: AsyncSession) -> MigrationStats:
    stats = MigrationStats(name="medication_records")
    result = await session.execute(
        select(LegacyMedicationRecord).order_by(
            LegacyMedicationRecord.created_at, LegacyMedicationRecord.id
        )
    )
    for legacy in result.scalars().all():
        legacy_animal = await session.get(LegacyAnimal, legacy.animal_id)
        if legacy_animal is None:
            message = f"Original animal not found for medication record: {legacy.id}"
            logger.warning(message)
            stats.skip(message)
            continue

        animal = await _match_animal(session, legacy_animal)
        if animal is None:
            message = f"New animal not found for medication record: {legacy.id}"
            logger.warning(message)
            stats.skip(message)
            continue

        session.add(
            MedicationRecord(
                animal_id=animal.id,
                date=legacy.data,
                end_date=legacy.end_date,
                time=legacy.horario,
                medication=legacy.medicamento,
                dose=legacy.dose,
                administered=legacy.administrado,
                observations=legacy.observacoes,
                administered_by=legacy.administrado_por,
            )
        )
        await session.commit()
        stats.create()
    return stats


async def run_migration(session: AsyncSession) -> MigrationSummary:
    """Copy legacy animals, then legacy medication records. Run once."""
    animals = await migrate_animals(session)
    records = await migrate_medication_records(session)
    for stats in (animals, records):
        logger.info(
            "Migrated %s: processed=%s created=%s skipped=%s",
            stats.name,
            stats.processed,
            stats.created,
            stats.skipped,
        )
    return MigrationSummary(animals=animals, medication_records=records)
