from __future__ import annotations

import logging
from dataclasses import replace

from invtrack.application.prompter import Prompter
from invtrack.domain.errors import AppError, ValidationError, error_message
from invtrack.domain.models import User

log = logging.getLogger(__name__)

ROLES = ("staff", "admin")


def sort_users(users: list[User]) -> list[User]:
    """Pending accounts first, then alphabetical by name, ignoring case."""
    return sorted(users, key=lambda u: (u.is_active, u.name.casefold(), u.name))


class UserManagement:
    """Approval and role administration.

    The guards here (built-in admin, self-edit) only shape the UI; the
    server enforces the same rules independently.
    """

    def __init__(self, admin_service, session, prompter: Prompter):
        self.admin = admin_service
        self.session = session
        self.prompter = prompter

        self.users: list[User] = []
        self.pending_roles: dict[int, str] = {}
        self.loading = False
        self.busy = False

    def fetch(self) -> None:
        self.loading = True
        try:
            users = self.admin.list_users()
        except AppError as e:
            log.error("users_fetch_failed error=%s", e)
            return
        finally:
            self.loading = False
        self.users = sort_users(users)
        self.pending_roles = {u.id: u.role for u in self.users}

    def _is_self(self, user: User) -> bool:
        current = self.session.current_user
        return current is not None and current.id == user.id

    def can_edit_role(self, user: User) -> bool:
        return not user.is_builtin_admin

    def can_deactivate(self, user: User) -> bool:
        return user.is_active and not self._is_self(user) and not user.is_builtin_admin

    def can_delete(self, user: User) -> bool:
        return not self._is_self(user) and not user.is_builtin_admin

    def can_save_role(self, user: User) -> bool:
        return user.is_active and self.pending_roles.get(user.id, user.role) != user.role

    def set_pending_role(self, user: User, role: str) -> None:
        if role not in ROLES:
            raise ValidationError(f"Unknown role '{role}'.")
        if not self.can_edit_role(user):
            return
        self.pending_roles[user.id] = role

    def update_user(self, user: User, role: str | None = None, is_active: bool | None = None) -> bool:
        if self.busy:
            return False
        if self._is_self(user):
            confirmed = self.prompter.confirm(
                "Edit your own account",
                "Warning: You are editing your own account. If you demote yourself, "
                "you will lose Admin access immediately.",
            )
            if not confirmed:
                return False

        new_role = role or user.role
        new_active = user.is_active if is_active is None else bool(is_active)

        self.busy = True
        try:
            self.session.require("manage_users")
            self.admin.approve(user.id, new_active, new_role)
        except AppError as e:
            log.warning("user_update_failed id=%s error=%s", user.id, e)
            self.prompter.alert("Users", error_message(e, "Failed to update user"))
            return False
        finally:
            self.busy = False

        if self._is_self(user):
            self.session.update_local_user(replace(self.session.current_user, role=new_role, is_active=new_active))

        self.prompter.info("Users", "User updated successfully!")
        self.fetch()
        return True

    def approve(self, user: User) -> bool:
        return self.update_user(user, self.pending_roles.get(user.id, user.role), True)

    def save_role(self, user: User) -> bool:
        if not self.can_save_role(user):
            return False
        return self.update_user(user, self.pending_roles[user.id], True)

    def deactivate(self, user: User) -> bool:
        if not self.can_deactivate(user):
            return False
        if not self.prompter.confirm(
            "Deactivate user",
            f"Are you sure you want to DEACTIVATE {user.name}? They will not be able to login.",
        ):
            return False
        return self.update_user(user, user.role, False)

    def delete(self, user: User) -> bool:
        if not self.can_delete(user) or self.busy:
            return False
        if not self.prompter.confirm(
            "Delete user",
            f"Are you sure you want to DELETE {user.name}? This action cannot be undone.",
        ):
            return False

        self.busy = True
        try:
            self.session.require("manage_users")
            self.admin.delete_user(user.id)
        except AppError as e:
            log.warning("user_delete_failed id=%s error=%s", user.id, e)
            self.prompter.alert("Users", f"Failed to delete user: {error_message(e, 'Unknown Error')}")
            return False
        finally:
            self.busy = False

        self.fetch()
        return True


def pending_count(admin_service) -> int:
    """Accounts awaiting approval; 0 when the lookup fails."""
    try:
        return len(admin_service.list_pending_users())
    except AppError as e:
        log.error("pending_users_fetch_failed error=%s", e)
        return 0
