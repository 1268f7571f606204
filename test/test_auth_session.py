from pathlib import Path

import pytest

from conftest import FakeRepo, MemoryFileStore, make_session
from invtrack.domain.errors import AuthError, AuthorizationError, RequestError, ValidationError
from invtrack.repositories.session_file import SessionFileStore
from invtrack.services.auth_service import SessionStore


def _login_ok(**_kw):
    return {
        "message": "Login successful",
        "token": "jwt-abc",
        "user": {"id": 5, "name": "Ana", "email": "ana@shop.com", "role": "staff"},
    }


def test_login_rejects_non_email_identifier_without_request():
    repo = FakeRepo()
    session = SessionStore(repo, MemoryFileStore())

    with pytest.raises(ValidationError, match="valid email"):
        session.login("bob", "secret")
    assert repo.calls == []


def test_builtin_admin_identifier_is_accepted():
    repo = FakeRepo({("POST", "/auth/login"): _login_ok})
    session = SessionStore(repo, MemoryFileStore())

    session.login("admin", "secret")

    assert repo.calls_to("POST", "/auth/login")[0]["json"] == {"email": "admin", "password": "secret"}


def test_login_rejected_surfaces_server_message():
    repo = FakeRepo({("POST", "/auth/login"): RequestError("401", status_code=401, server_message="Invalid credentials")})
    session = SessionStore(repo, MemoryFileStore())

    with pytest.raises(AuthError, match="Invalid credentials"):
        session.login("ana@shop.com", "wrong")
    assert not session.is_authenticated()


def test_login_failure_without_server_message_uses_generic_text():
    repo = FakeRepo({("POST", "/auth/login"): RequestError("500", status_code=500)})
    session = SessionStore(repo, MemoryFileStore())

    with pytest.raises(AuthError, match="Login failed. Please try again."):
        session.login("ana@shop.com", "pw")


def test_session_survives_restart_and_logout_clears_it(tmp_path: Path):
    repo = FakeRepo({("POST", "/auth/login"): _login_ok})
    path = tmp_path / "session.json"

    first = SessionStore(repo, SessionFileStore(path))
    result = first.login("ana@shop.com", "pw")
    assert result.token == "jwt-abc"
    assert path.exists()

    second = SessionStore(repo, SessionFileStore(path))
    assert second.is_authenticated()
    assert second.token == "jwt-abc"
    assert second.current_user.name == "Ana"

    second.logout()
    assert not path.exists()
    assert SessionStore(repo, SessionFileStore(path)).current_user is None


def test_register_sends_optional_role_and_authenticates():
    repo = FakeRepo({("POST", "/auth/register"): _login_ok})
    session = SessionStore(repo, MemoryFileStore())

    session.register("Ana", "ana@shop.com", "pw")

    assert repo.calls_to("POST", "/auth/register")[0]["json"] == {
        "name": "Ana", "email": "ana@shop.com", "password": "pw",
    }
    assert session.is_authenticated()


def test_register_failure_falls_back_to_generic_text():
    repo = FakeRepo({("POST", "/auth/register"): RequestError("409", status_code=409)})
    session = SessionStore(repo, MemoryFileStore())

    with pytest.raises(AuthError, match="Registration failed"):
        session.register("Ana", "ana@shop.com", "pw")


def test_staff_cannot_manage_users_or_export():
    session = make_session(FakeRepo(), role="staff")

    assert session.can("manage_products")
    assert session.can("update_stock")
    assert not session.can("manage_users")
    assert not session.can("export_data")
    with pytest.raises(AuthorizationError):
        session.require("view_activity_logs")


def test_unknown_action_is_denied():
    session = make_session(FakeRepo(), role="admin")
    assert not session.can("format_disk")


def test_session_file_ignores_corrupt_content(tmp_path: Path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    assert SessionFileStore(path).load() is None
