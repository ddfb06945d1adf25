"""Bootstrap helpers for default data."""

from __future__ import annotations

import logging

from shelter.core.config import get_settings
from shelter.db.session import session_scope
from shelter.schemas.user import UserCreate
from shelter.services.user_service import create_user, get_user_by_email

logger = logging.getLogger(__name__)


async def ensure_default_caretaker() -> None:
    """Create the configured default caretaker if it does not exist yet."""

    settings = get_settings()
    if not settings.default_caretaker_email or not settings.default_caretaker_password:
        return
    async with session_scope(settings.database_url) as session:
        existing = await get_user_by_email(session, settings.default_caretaker_email)
        if existing is not None:
            return
        payload = UserCreate(
            email=settings.default_caretaker_email,
            password=settings.default_caretaker_password,
            full_name=settings.default_caretaker_name,
        )
        await create_user(session, payload)
        logger.info("Created default caretaker %s", payload.email)
