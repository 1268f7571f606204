from __future__ import annotations

import logging

from invtrack.domain.models import User
from invtrack.services.payload import parsed

log = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, repo):
        self.repo = repo

    def update_name(self, name: str) -> User:
        data = self.repo.put("/profile/update", json={"name": name}) or {}
        with parsed("profile"):
            return User.from_dict(data.get("user") or {})

    def change_password(self, current_password: str, new_password: str) -> None:
        self.repo.put(
            "/profile/change-password",
            json={"current_password": current_password, "new_password": new_password},
        )
        log.info("password_changed")
