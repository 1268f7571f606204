from __future__ import annotations

import logging

from invtrack.domain.models import ActivityLogEntry, User
from invtrack.services.payload import parsed

log = logging.getLogger(__name__)


class AdminService:
    def __init__(self, repo):
        self.repo = repo

    def list_users(self) -> list[User]:
        data = self.repo.get("/admin/users") or []
        with parsed("users"):
            return [User.from_dict(u) for u in data]

    def list_pending_users(self) -> list[User]:
        data = self.repo.get("/admin/users/pending") or []
        with parsed("pending_users"):
            return [User.from_dict(u) for u in data]

    def approve(self, user_id: int, is_active: bool, role: str) -> dict:
        result = self.repo.put(f"/admin/users/{int(user_id)}/approve", json={"is_active": bool(is_active), "role": role})
        log.info("user_status_updated id=%s active=%s role=%s", user_id, is_active, role)
        return result or {}

    def delete_user(self, user_id: int) -> None:
        self.repo.delete(f"/admin/users/{int(user_id)}")
        log.info("user_deleted id=%s", user_id)

    def list_logs(self) -> list[ActivityLogEntry]:
        data = self.repo.get("/admin/logs") or []
        with parsed("logs"):
            return [ActivityLogEntry.from_dict(e) for e in data]
