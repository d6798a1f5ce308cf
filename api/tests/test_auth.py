"""Tests for session-cookie authentication dependencies."""

from __future__ import annotations

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import HTTPException

from flagleague.dependencies.auth import (
    CurrentUser,
    get_current_user,
    require_admin,
    require_user,
)
from flagleague.services.sessions import create_session, hash_token
from flagleague.utils.datetime_utils import now_utc


def _user(role: str = "user", is_active: bool = True) -> SimpleNamespace:
    return SimpleNamespace(id=5, name="Ana", email="ana@example.com", role=role, is_active=is_active)


class TestGetCurrentUser:
    @pytest.fixture
    def mock_request(self) -> MagicMock:
        request = MagicMock()
        request.client.host = "127.0.0.1"
        request.url.path = "/api/auth/me"
        request.cookies = {"lufa_session": "token-abc"}
        return request

    @pytest.mark.asyncio
    async def test_no_cookie_is_anonymous(self, mock_request: MagicMock) -> None:
        mock_request.cookies = {}
        session = AsyncMock()

        assert await get_current_user(mock_request, session) is None
        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_valid_session_resolves_user(self, mock_request: MagicMock) -> None:
        with patch(
            "flagleague.dependencies.auth.resolve_session_user",
            AsyncMock(return_value=_user(role="admin")),
        ) as resolver:
            current = await get_current_user(mock_request, AsyncMock())

        resolver.assert_awaited_once()
        assert current == CurrentUser(id=5, name="Ana", email="ana@example.com", role="admin")
        assert current.is_admin

    @pytest.mark.asyncio
    async def test_expired_or_unknown_session_is_anonymous(self, mock_request: MagicMock) -> None:
        with patch(
            "flagleague.dependencies.auth.resolve_session_user",
            AsyncMock(return_value=None),
        ):
            assert await get_current_user(mock_request, AsyncMock()) is None

    @pytest.mark.asyncio
    async def test_cookie_name_from_settings(self, mock_request: MagicMock) -> None:
        mock_request.cookies = {"other_cookie": "token-abc"}
        with patch("flagleague.dependencies.auth.settings") as mock_settings:
            mock_settings.session_cookie_name = "other_cookie"
            with patch(
                "flagleague.dependencies.auth.resolve_session_user",
                AsyncMock(return_value=_user()),
            ):
                current = await get_current_user(mock_request, AsyncMock())

        assert current is not None
        assert not current.is_admin


class TestRequireUser:
    @pytest.mark.asyncio
    async def test_anonymous_rejected(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await require_user(None)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Not authenticated"

    @pytest.mark.asyncio
    async def test_user_passed_through(self) -> None:
        user = CurrentUser(id=1, name="Ana", email="ana@example.com", role="user")
        assert await require_user(user) is user


class TestRequireAdmin:
    @pytest.mark.asyncio
    async def test_non_admin_rejected(self) -> None:
        request = MagicMock()
        request.url.path = "/api/teams"
        user = CurrentUser(id=1, name="Ana", email="ana@example.com", role="user")

        with pytest.raises(HTTPException) as exc_info:
            await require_admin(request, user)

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_allowed(self) -> None:
        admin = CurrentUser(id=2, name="Root", email="root@example.com", role="admin")
        assert await require_admin(MagicMock(), admin) is admin


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_stores_only_token_digest(self) -> None:
        session = MagicMock()
        session.flush = AsyncMock()

        token = await create_session(session, _user())

        record = session.add.call_args.args[0]
        assert record.user_id == 5
        assert record.token_hash == hash_token(token)
        assert record.token_hash != token
        assert len(record.token_hash) == 64
        assert record.expires_at > now_utc() + timedelta(days=6)
        session.flush.assert_awaited_once()
