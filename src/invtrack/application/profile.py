from __future__ import annotations

import logging
from dataclasses import replace

from invtrack.application.forms import check_required
from invtrack.domain.errors import AppError, ValidationError, error_message

log = logging.getLogger(__name__)


class ProfileEditor:
    """Own-account edits. Errors and successes land in `error` / `success`."""

    def __init__(self, profile_service, session):
        self.svc = profile_service
        self.session = session
        self.error = ""
        self.success = ""
        self.busy = False

    def _reset(self) -> None:
        self.error = ""
        self.success = ""

    def update_name(self, name: str) -> bool:
        self._reset()
        name = (name or "").strip()
        self.busy = True
        try:
            check_required({"name": name}, {"name": "Name"})
            updated = self.svc.update_name(name)
        except AppError as e:
            self.error = error_message(e, "Failed to update profile")
            return False
        finally:
            self.busy = False

        current = self.session.current_user
        if current is not None:
            # the server echoes id/name/email/role only
            self.session.update_local_user(replace(current, name=updated.name or name))
        self.success = "Profile updated successfully!"
        log.info("profile_updated")
        return True

    def change_password(self, current_password: str, new_password: str, confirm_password: str) -> bool:
        self._reset()
        self.busy = True
        try:
            check_required(
                {"current": current_password, "new": new_password},
                {"current": "Current password", "new": "New password"},
            )
            if new_password != confirm_password:
                raise ValidationError("New passwords don't match")
            self.svc.change_password(current_password, new_password)
        except AppError as e:
            self.error = error_message(e, "Failed to change password")
            return False
        finally:
            self.busy = False

        self.success = "Password changed successfully!"
        return True
