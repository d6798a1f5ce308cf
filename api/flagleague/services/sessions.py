"""Server-side login sessions.

The cookie carries an opaque random token; only its SHA-256 digest is
stored.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import timedelta

from sqlalchemy import delete, select

from ..config import settings
from ..db import AsyncSession
from ..db.users import User, UserSession
from ..utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def create_session(session: AsyncSession, user: User) -> str:
    """Persist a new session for ``user`` and return the raw cookie token."""
    token = secrets.token_urlsafe(32)
    record = UserSession(
        user_id=user.id,
        token_hash=hash_token(token),
        expires_at=now_utc() + timedelta(seconds=settings.session_max_age_seconds),
    )
    session.add(record)
    await session.flush()
    logger.info("session_created", extra={"user_id": user.id})
    return token


async def resolve_session_user(session: AsyncSession, token: str) -> User | None:
    """Return the active user owning ``token``, or None if unknown or expired."""
    stmt = (
        select(User)
        .join(UserSession, UserSession.user_id == User.id)
        .where(
            UserSession.token_hash == hash_token(token),
            UserSession.expires_at > now_utc(),
        )
    )
    result = await session.execute(stmt)
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        return None
    return user


async def revoke_session(session: AsyncSession, token: str) -> None:
    await session.execute(delete(UserSession).where(UserSession.token_hash == hash_token(token)))
