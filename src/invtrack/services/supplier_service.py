from __future__ import annotations

import logging

from invtrack.domain.models import Supplier
from invtrack.services.payload import parsed

log = logging.getLogger(__name__)

SUPPLIER_FIELDS = ("name", "contact_name", "phone", "email", "address")


def _body(data: dict) -> dict:
    return {k: data[k] for k in SUPPLIER_FIELDS if k in data}


class SupplierService:
    def __init__(self, repo):
        self.repo = repo

    def list_suppliers(self) -> list[Supplier]:
        data = self.repo.get("/suppliers") or {}
        with parsed("suppliers"):
            return [Supplier.from_dict(s) for s in data.get("suppliers") or []]

    def get_supplier(self, supplier_id: int) -> Supplier:
        data = self.repo.get(f"/suppliers/{int(supplier_id)}") or {}
        with parsed("supplier"):
            return Supplier.from_dict(data.get("supplier") or {})

    def create(self, data: dict) -> dict:
        result = self.repo.post("/suppliers", json=_body(data))
        log.info("supplier_created name=%s", data.get("name"))
        return result or {}

    def update(self, supplier_id: int, data: dict) -> dict:
        result = self.repo.put(f"/suppliers/{int(supplier_id)}", json=_body(data))
        log.info("supplier_updated id=%s", supplier_id)
        return result or {}

    def delete(self, supplier_id: int) -> None:
        self.repo.delete(f"/suppliers/{int(supplier_id)}")
        log.info("supplier_deleted id=%s", supplier_id)
