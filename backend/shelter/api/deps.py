"""Common API dependencies."""

from __future__ import annotations

import uuid
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.core.config import get_settings
from shelter.core.security import subject_from_token
from shelter.db.session import get_session
from shelter.models.user import User
from shelter.services import user_service
from shelter.services.errors import (
    NotFoundError,
    UnauthenticatedError,
)

settings = get_settings()

# Anonymous requests are allowed through: queries degrade to empty results and
# mutations are rejected by the service layer.
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_v1_prefix}/auth/token", auto_error=False
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_optional_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User | None:
    """Resolve the caller from a bearer token, or None when absent or invalid."""
    if not token:
        return None
    user_id = subject_from_token(token)
    if user_id is None:
        return None
    return await user_service.get_active_user(session, user_id)


async def get_caller_id(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> uuid.UUID | None:
    """Return the caller id injected into service calls."""
    return user.id if user is not None else None


async def get_current_user(
    user: Annotated[User | None, Depends(get_optional_user)],
) -> User:
    """Require an authenticated caretaker."""
    if user is None:
        raise unauthenticated()
    return user


def unauthenticated() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def translate_domain_error(exc: Exception) -> HTTPException:
    """Map a service-layer error onto the matching HTTP error."""
    if isinstance(exc, UnauthenticatedError):
        return unauthenticated()
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
