"""Caretaker authentication endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api import deps
from shelter.core.config import get_settings
from shelter.models.user import User
from shelter.schemas.auth import Token
from shelter.schemas.user import UserCreate, UserRead
from shelter.services import user_service
from shelter.services.auth_service import authenticate_user, create_access_token_for_user

logger = logging.getLogger(__name__)

router = APIRouter()

_settings = get_settings()

_SECONDS = {
    "second": 1,
    "seconds": 1,
    "minute": 60,
    "minutes": 60,
    "hour": 3600,
    "hours": 3600,
    "day": 86400,
    "days": 86400,
}


def parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    """Parse limits such as ``10/minute`` into (times, seconds)."""
    count_str, sep, window_str = value.partition("/")
    if not sep:
        return fallback
    try:
        count = int(count_str.strip())
    except ValueError:
        return fallback
    return count, _SECONDS.get(window_str.strip().lower(), fallback[1])


def _rate_dependency(limit: tuple[int, int]):
    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=limit[0], seconds=limit[1])
        await limiter(request, response)

    return Depends(_dependency)


_LOGIN_RATE_DEP = _rate_dependency(parse_rate(_settings.rate_limit_login, fallback=(10, 60)))
_DEFAULT_RATE_DEP = _rate_dependency(
    parse_rate(_settings.rate_limit_default, fallback=(100, 60))
)


@router.post(
    "/token",
    response_model=Token,
    summary="Obtain access token",
    dependencies=[_LOGIN_RATE_DEP],
)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Token:
    """Validate credentials and issue a bearer token."""
    user = await authenticate_user(
        session, email=form_data.username, password=form_data.password
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    logger.info("Caretaker %s signed in", user.id)
    return Token(access_token=create_access_token_for_user(user))


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register caretaker",
    dependencies=[_DEFAULT_RATE_DEP],
)
async def register_caretaker(
    payload: UserCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> UserRead:
    existing = await user_service.get_user_by_email(session, email=payload.email)
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered"
        )
    try:
        user = await user_service.create_user(session, payload)
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered"
        ) from exc
    return UserRead.model_validate(user)


@router.get("/me", response_model=UserRead, summary="Current caretaker")
async def read_current_caretaker(
    current_user: Annotated[User, Depends(deps.get_current_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)
