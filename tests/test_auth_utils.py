"""
Tests for the login session and token storage in `auth_utils.py`.
"""

from __future__ import annotations

import pytest

from auth_utils import AuthSession, MemoryStorage, StreamlitStorage, User

TOKENS = {"accessToken": "akses-123", "refreshToken": "refresh-456", "expiresIn": "1h"}
ADMIN = {"id": 1, "username": "kader1", "role": "admin", "posyandu_name": "Posyandu Mawar"}


@pytest.fixture
def session() -> AuthSession:
    return AuthSession(MemoryStorage())


def test_empty_session_is_not_authenticated(session: AuthSession) -> None:
    assert session.access_token is None
    assert session.user is None
    assert session.is_authenticated() is False
    assert session.is_admin() is False


def test_set_auth_data_stores_tokens_and_user(session: AuthSession) -> None:
    session.set_auth_data(TOKENS, ADMIN)

    assert session.access_token == "akses-123"
    assert session.refresh_token == "refresh-456"
    assert session.user == User(id=1, username="kader1", role="admin", posyandu_name="Posyandu Mawar")
    assert session.is_authenticated() is True
    assert session.is_admin() is True


def test_non_admin_role(session: AuthSession) -> None:
    session.set_auth_data(TOKENS, dict(ADMIN, role="kader"))
    assert session.is_authenticated() is True
    assert session.is_admin() is False


def test_clear_logs_out(session: AuthSession) -> None:
    session.set_auth_data(TOKENS, ADMIN)
    session.clear()
    assert session.is_authenticated() is False
    assert session.user is None


def test_token_without_user_is_not_authenticated() -> None:
    storage = MemoryStorage()
    storage.set("accessToken", "akses-123")
    assert AuthSession(storage).is_authenticated() is False


def test_corrupt_user_data_clears_session() -> None:
    storage = MemoryStorage()
    storage.set("accessToken", "akses-123")
    storage.set("user", "{bukan json")
    session = AuthSession(storage)

    assert session.user is None
    assert storage.get("accessToken") is None


def test_streamlit_storage_only_touches_prefixed_keys() -> None:
    state = {"halaman": "profil", "profil_id": "7"}
    session = AuthSession(StreamlitStorage(state))
    session.set_auth_data(TOKENS, ADMIN)

    assert state["auth_accessToken"] == "akses-123"
    assert "auth_user" in state

    session.clear()
    assert state == {"halaman": "profil", "profil_id": "7"}
