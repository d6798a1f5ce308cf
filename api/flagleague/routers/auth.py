"""Account registration and cookie-session login."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import select

from ..config import settings
from ..db import AsyncSession, get_db
from ..db.users import User, UserRole
from ..dependencies.auth import CurrentUser, require_user, session_token_from_request
from ..services.passwords import hash_password, verify_password
from ..services.sessions import create_session, revoke_session
from ..utils.datetime_utils import now_utc
from .schemas.auth import LoginRequest, RegisterRequest, UserOut
from .schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _user_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        lastLogin=user.last_login,
    )


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    session: AsyncSession = Depends(get_db),
) -> UserOut:
    """Create a regular user account. Self-registration never grants admin."""
    existing = await session.execute(select(User.id).where(User.email == payload.email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this email already exists",
        )

    user = User(
        name=payload.name.strip(),
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=UserRole.user.value,
        is_active=True,
    )
    session.add(user)
    await session.flush()
    logger.info("user_registered", extra={"user_id": user.id})
    return _user_out(user)


@router.post("/login", response_model=UserOut)
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_db),
) -> UserOut:
    result = await session.execute(select(User).where(User.email == payload.email))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active or not verify_password(payload.password, user.password_hash):
        logger.warning(
            "login_failed",
            extra={"client_ip": request.client.host if request.client else "unknown"},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    user.last_login = now_utc()
    token = await create_session(session, user)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
    )
    return _user_out(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    token = session_token_from_request(request)
    if token:
        await revoke_session(session, token)
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserOut)
async def me(
    current_user: CurrentUser = Depends(require_user),
    session: AsyncSession = Depends(get_db),
) -> UserOut:
    user = await session.get(User, current_user.id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return _user_out(user)
