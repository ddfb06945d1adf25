"""Copy legacy Portuguese animal and medication tables into the current schema."""

# ruff: noqa: E402  # allow path bootstrap before app imports

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from shelter.db.session import dispose_engine, session_scope
from shelter.services.migration_service import MigrationSummary, run_migration

LOGGER = logging.getLogger("migrate_legacy")


def configure_logging(verbose: bool) -> None:
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.addHandler(console)


async def _run(database_url: str | None) -> MigrationSummary:
    try:
        async with session_scope(database_url) as session:
            return await run_migration(session)
    finally:
        await dispose_engine(database_url)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the one-shot legacy migration")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Async SQLAlchemy URL; defaults to DATABASE_URL",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm the run; the migration is not idempotent",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    configure_logging(args.verbose)
    if not args.yes:
        LOGGER.error("Refusing to run without --yes: a second run duplicates every row")
        raise SystemExit(1)

    summary = asyncio.run(_run(args.database_url))

    LOGGER.info("Migration summary:")
    for stat in (summary.animals, summary.medication_records):
        LOGGER.info(
            "  %-20s processed=%-5s created=%-5s skipped=%-5s",
            stat.name,
            stat.processed,
            stat.created,
            stat.skipped,
        )
        if stat.warnings:
            LOGGER.info("    skipped: %s", stat.warnings)


if __name__ == "__main__":
    main()
