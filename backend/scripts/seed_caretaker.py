"""Create a caretaker login for local development."""

# ruff: noqa: E402

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))

from shelter.db.session import dispose_engine, session_scope
from shelter.schemas.user import UserCreate
from shelter.services.user_service import create_user, get_user_by_email


async def _seed(email: str, password: str, full_name: str) -> None:
    try:
        async with session_scope() as session:
            if await get_user_by_email(session, email) is not None:
                print(f"Caretaker {email} already exists")
                return
            user = await create_user(
                session,
                UserCreate(email=email, password=password, full_name=full_name),
            )
            print(f"Created caretaker {user.email} ({user.id})")
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed a caretaker account")
    parser.add_argument("--email", default="carer@shelter.local")
    parser.add_argument("--password", default="carer1234")
    parser.add_argument("--name", default="Dev Caretaker")
    args = parser.parse_args()
    asyncio.run(_seed(args.email, args.password, args.name))


if __name__ == "__main__":
    main()
