from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    path: Path
    size_bytes: int
    rows: Optional[int] = None
    headers: tuple[str, ...] = ()


class ExportService:
    def __init__(self, repo, today: Callable[[], date] = date.today):
        self.repo = repo
        self.today = today

    def _save(self, payload: bytes, target_dir: Path | str, prefix: str, extension: str) -> Path:
        out_dir = Path(target_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        path = out_dir / f"{prefix}_{self.today().isoformat()}.{extension}"
        path.write_bytes(payload)
        log.info("export_saved path=%s bytes=%s", path, len(payload))
        return path

    @staticmethod
    def inspect_workbook(path: Path) -> tuple[Optional[int], tuple[str, ...]]:
        """Data-row count and header row of the first sheet, or (None, ()) if unreadable."""
        try:
            wb = load_workbook(path, read_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            log.warning("export_workbook_unreadable path=%s error=%s", path, e)
            return None, ()
        try:
            ws = wb.active
            rows = list(ws.iter_rows(values_only=True))
        finally:
            wb.close()
        if not rows:
            return 0, ()
        headers = tuple(str(v).strip() for v in rows[0] if v is not None)
        data_rows = sum(1 for r in rows[1:] if any(v is not None for v in r))
        return data_rows, headers

    def download_products(self, target_dir: Path | str) -> ExportResult:
        payload = self.repo.get_bytes("/admin/export/products")
        path = self._save(payload, target_dir, "inventory_products", "xlsx")
        rows, headers = self.inspect_workbook(path)
        return ExportResult(path=path, size_bytes=len(payload), rows=rows, headers=headers)

    def download_activity_logs(self, target_dir: Path | str) -> ExportResult:
        payload = self.repo.get_bytes("/admin/export/logs")
        path = self._save(payload, target_dir, "activity_logs", "pdf")
        return ExportResult(path=path, size_bytes=len(payload))
