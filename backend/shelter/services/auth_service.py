"""Authentication service helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from shelter.core.security import create_access_token, verify_password
from shelter.models.user import User, UserStatus
from shelter.services import user_service


async def authenticate_user(
    session: AsyncSession, email: str, password: str
) -> User | None:
    """Validate credentials and return the caretaker if correct."""
    user = await user_service.get_user_by_email(session, email=email)
    if user is None:
        return None
    if user.status != UserStatus.ACTIVE:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token_for_user(user: User) -> str:
    """Generate a bearer token for a caretaker."""
    return create_access_token(str(user.id), name=user.full_name)
