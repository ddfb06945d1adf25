"""Caretaker data access helpers."""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.core.security import get_password_hash
from shelter.models.user import User, UserStatus
from shelter.schemas.user import UserCreate


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    """Return a caretaker by email address."""
    result = await session.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Return a caretaker by ID."""
    return await session.get(User, user_id)


async def get_active_user(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    """Return the caretaker only when their account is active."""
    user = await get_user(session, user_id)
    if user is None or user.status != UserStatus.ACTIVE:
        return None
    return user


async def create_user(session: AsyncSession, payload: UserCreate) -> User:
    """Persist a new caretaker with a hashed password."""
    user = User(
        email=payload.email.lower(),
        hashed_password=get_password_hash(payload.password),
        full_name=payload.full_name,
        status=UserStatus.ACTIVE,
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(user)
    return user
