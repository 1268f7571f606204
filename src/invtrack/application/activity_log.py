from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from invtrack.application.prompter import Prompter
from invtrack.domain.errors import AppError, ValidationError, error_message
from invtrack.domain.models import ActivityLogEntry, LOG_ACTIONS
from invtrack.services.export_service import ExportResult

log = logging.getLogger(__name__)

ALL_ACTIONS = "ALL"


class ActivityLogViewer:
    """Audit trail, fetched once and filtered locally by action."""

    def __init__(self, admin_service, export_service, session, prompter: Prompter):
        self.admin = admin_service
        self.exports = export_service
        self.session = session
        self.prompter = prompter

        self.logs: list[ActivityLogEntry] = []
        self.filter = ALL_ACTIONS
        self.loading = False

    def fetch(self) -> None:
        self.loading = True
        try:
            self.session.require("view_activity_logs")
            logs = self.admin.list_logs()
        except AppError as e:
            log.error("activity_logs_fetch_failed error=%s", e)
            return
        finally:
            self.loading = False
        self.logs = logs

    def set_filter(self, action: str) -> None:
        action = (action or ALL_ACTIONS).upper()
        if action != ALL_ACTIONS and action not in LOG_ACTIONS:
            raise ValidationError(f"Unknown action filter '{action}'.")
        self.filter = action

    def visible_logs(self) -> list[ActivityLogEntry]:
        if self.filter == ALL_ACTIONS:
            return list(self.logs)
        return [entry for entry in self.logs if entry.action == self.filter]

    def export(self, target_dir: Path | str) -> Optional[ExportResult]:
        try:
            self.session.require("export_data")
            return self.exports.download_activity_logs(target_dir)
        except AppError as e:
            log.warning("activity_logs_export_failed error=%s", e)
            self.prompter.alert("Activity logs", error_message(e, "Failed to export logs"))
            return None
