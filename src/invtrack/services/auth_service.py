from __future__ import annotations

import logging
import re
from typing import Optional

from invtrack.domain.errors import AuthError, AuthorizationError, RequestError, ValidationError
from invtrack.domain.models import AuthResult, BUILTIN_ADMIN_EMAIL, User

log = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

PERMISSIONS: dict[str, set[str]] = {
    "manage_products": {"admin", "staff"},
    "update_stock": {"admin", "staff"},
    "view_stock_history": {"admin", "staff"},
    "manage_suppliers": {"admin", "staff"},
    "manage_categories": {"admin", "staff"},
    "manage_users": {"admin"},
    "view_activity_logs": {"admin"},
    "export_data": {"admin"},
}


def validate_login_identifier(identifier: str) -> None:
    # the built-in administrator signs in with a non-email identifier
    if identifier != BUILTIN_ADMIN_EMAIL and not _EMAIL_RE.search(identifier):
        raise ValidationError("Please enter a valid email address.")


class SessionStore:
    """Single writer of the authenticated identity.

    Everything else reads `current_user` / `token` and never mutates them.
    """

    def __init__(self, repo, file_store):
        self.repo = repo
        self.file_store = file_store
        self._token: Optional[str] = None
        self._user: Optional[User] = None
        self._restore()

    def _restore(self) -> None:
        data = self.file_store.load()
        if not data:
            return
        self._token = str(data["token"])
        self._user = User.from_dict(data["user"])
        log.info("session_restored user_id=%s", self._user.id)

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def current_user(self) -> Optional[User]:
        return self._user

    def is_authenticated(self) -> bool:
        return bool(self._token) and self._user is not None

    def _accept(self, payload: dict) -> AuthResult:
        token = str(payload.get("token") or "")
        user_data = payload.get("user") or {}
        if not token or not isinstance(user_data, dict):
            raise AuthError("Server returned an invalid session.")
        user = User.from_dict(user_data)
        self._token = token
        self._user = user
        self.file_store.save(token, user.to_dict())
        return AuthResult(token=token, user=user, message=str(payload.get("message") or ""))

    def login(self, identifier: str, secret: str) -> AuthResult:
        identifier = (identifier or "").strip()
        if not identifier or not secret:
            raise ValidationError("Email and password are required.")
        validate_login_identifier(identifier)

        try:
            payload = self.repo.post("/auth/login", json={"email": identifier, "password": secret})
        except RequestError as exc:
            log.warning("login_rejected identifier=%s status=%s", identifier, exc.status_code)
            raise AuthError(exc.server_message or "Login failed. Please try again.") from exc

        result = self._accept(payload or {})
        log.info("login_ok user_id=%s role=%s", result.user.id, result.user.role)
        return result

    def register(self, name: str, email: str, secret: str, role: str | None = None) -> AuthResult:
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not secret:
            raise ValidationError("Name, email and password are required.")

        body = {"name": name, "email": email, "password": secret}
        if role:
            body["role"] = role

        try:
            payload = self.repo.post("/auth/register", json=body)
        except RequestError as exc:
            log.warning("register_rejected email=%s status=%s", email, exc.status_code)
            raise AuthError(exc.server_message or "Registration failed. Please try again.") from exc

        result = self._accept(payload or {})
        log.info("register_ok user_id=%s", result.user.id)
        return result

    def logout(self) -> None:
        if self._user is not None:
            log.info("logout user_id=%s", self._user.id)
        self._token = None
        self._user = None
        self.file_store.clear()

    def update_local_user(self, user: User) -> None:
        self._user = user
        if self._token:
            self.file_store.save(self._token, user.to_dict())

    def can(self, action: str) -> bool:
        if self._user is None:
            return False
        allowed_roles = PERMISSIONS.get(action)
        if not allowed_roles:
            return False
        return self._user.role in allowed_roles

    def require(self, action: str) -> None:
        if not self.can(action):
            role = self._user.role if self._user else "anonymous"
            raise AuthorizationError(f"Role '{role}' is not allowed to perform '{action}'.")
