from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)


class SessionFileStore:
    """Persists the bearer token and user snapshot between launches."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("session_file_unreadable path=%s error=%s", self.path, exc)
            return None
        if not isinstance(data, dict) or not data.get("token") or not isinstance(data.get("user"), dict):
            log.warning("session_file_invalid path=%s", self.path)
            return None
        return data

    def save(self, token: str, user: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token, "user": user}, ensure_ascii=False), encoding="utf-8")
        try:
            self.path.chmod(0o600)
        except OSError:
            log.warning("session_file_chmod_failed path=%s", self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
