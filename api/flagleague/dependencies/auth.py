"""Session-cookie authentication dependencies.

The signed-in user is resolved once per request into a ``CurrentUser``
value and handed to route handlers through ``Depends``; nothing about the
caller is kept at module level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status

from ..config import settings
from ..db import AsyncSession, get_db
from ..db.users import User, UserRole
from ..services.sessions import resolve_session_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CurrentUser:
    id: int
    name: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value

    @classmethod
    def from_model(cls, user: User) -> "CurrentUser":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role)


def session_token_from_request(request: Request) -> str | None:
    return request.cookies.get(settings.session_cookie_name) or None


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> CurrentUser | None:
    """Resolve the session cookie to a user, or None for anonymous requests."""
    token = session_token_from_request(request)
    if not token:
        return None

    user = await resolve_session_user(session, token)
    if user is None:
        logger.info(
            "Invalid or expired session",
            extra={
                "client_ip": request.client.host if request.client else "unknown",
                "path": request.url.path,
            },
        )
        return None
    return CurrentUser.from_model(user)


async def require_user(
    current_user: CurrentUser | None = Depends(get_current_user),
) -> CurrentUser:
    """Reject anonymous callers with 401."""
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return current_user


async def require_admin(
    request: Request,
    current_user: CurrentUser = Depends(require_user),
) -> CurrentUser:
    """Reject signed-in non-admins with 403."""
    if not current_user.is_admin:
        logger.warning(
            "Admin access denied",
            extra={"user_id": current_user.id, "path": request.url.path},
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator privileges required",
        )
    return current_user
