from datetime import date
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook

from conftest import FakeRepo
from invtrack.services.export_service import ExportService


def _xlsx_bytes() -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(["SKU", "Name", "Stock"])
    ws.append(["SKU-1", "Bolt", 10])
    ws.append(["SKU-2", "Nut", 3])
    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def test_products_export_is_saved_with_dated_name_and_inspected(tmp_path: Path):
    repo = FakeRepo({("GET", "/admin/export/products"): _xlsx_bytes()})
    exports = ExportService(repo, today=lambda: date(2026, 3, 9))

    result = exports.download_products(tmp_path)

    assert result.path == tmp_path / "inventory_products_2026-03-09.xlsx"
    assert result.path.exists()
    assert result.rows == 2
    assert result.headers == ("SKU", "Name", "Stock")


def test_unreadable_workbook_still_saved(tmp_path: Path):
    repo = FakeRepo({("GET", "/admin/export/products"): b"not a workbook"})
    result = ExportService(repo, today=lambda: date(2026, 3, 9)).download_products(tmp_path)

    assert result.path.read_bytes() == b"not a workbook"
    assert result.rows is None


def test_logs_export_pdf_name(tmp_path: Path):
    repo = FakeRepo({("GET", "/admin/export/logs"): b"%PDF-1.4 fake"})
    result = ExportService(repo, today=lambda: date(2026, 3, 9)).download_activity_logs(tmp_path / "out")

    assert result.path.name == "activity_logs_2026-03-09.pdf"
    assert result.size_bytes == len(b"%PDF-1.4 fake")
