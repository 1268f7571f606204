from __future__ import annotations

from typing import Protocol


class Prompter(Protocol):
    """Blocking user notifications. Tk implementation lives in ui.app."""

    def alert(self, title: str, message: str) -> None: ...
    def info(self, title: str, message: str) -> None: ...
    def confirm(self, title: str, message: str) -> bool: ...
