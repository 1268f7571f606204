from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import sys


DEFAULT_API_URL = "http://localhost:8081/api"


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    session_path: Path
    logs_dir: Path
    exports_dir: Path


@dataclass(frozen=True)
class ApiSettings:
    base_url: str
    timeout_seconds: float = 10.0
    page_size: int = 12


def _windows_appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _mac_app_support() -> Path:
    return Path.home() / "Library" / "Application Support"


def get_app_paths(app_name: str = "InventoryTracker") -> AppPaths:
    if sys.platform.startswith("win"):
        base = _windows_appdata() / app_name
    elif sys.platform == "darwin":
        base = _mac_app_support() / app_name
    else:
        base = Path.home() / f".{app_name.lower()}"

    logs = base / "logs"
    exports = base / "exports"

    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)
    exports.mkdir(parents=True, exist_ok=True)

    return AppPaths(base_dir=base, session_path=base / "session.json", logs_dir=logs, exports_dir=exports)


def get_api_settings(env: dict[str, str] | None = None) -> ApiSettings:
    env = os.environ if env is None else env

    base_url = (env.get("INVTRACK_API_URL") or DEFAULT_API_URL).strip().rstrip("/")
    try:
        timeout = float(env.get("INVTRACK_TIMEOUT", "10"))
    except ValueError:
        timeout = 10.0
    try:
        page_size = int(env.get("INVTRACK_PAGE_SIZE", "12"))
    except ValueError:
        page_size = 12

    return ApiSettings(
        base_url=base_url,
        timeout_seconds=timeout if timeout > 0 else 10.0,
        page_size=page_size if page_size > 0 else 12,
    )
