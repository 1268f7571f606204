from __future__ import annotations

import logging
from typing import Callable, Optional

from invtrack.application.forms import check_required
from invtrack.application.prompter import Prompter
from invtrack.domain.errors import AppError, error_message
from invtrack.domain.models import Supplier

log = logging.getLogger(__name__)

REQUIRED_SUPPLIER_FIELDS = {
    "name": "Company name",
    "contact_name": "Contact name",
    "phone": "Phone",
    "email": "Email",
}


class SupplierManagement:
    def __init__(self, supplier_service, session, prompter: Prompter, on_change: Callable[[], None] | None = None):
        self.svc = supplier_service
        self.session = session
        self.prompter = prompter
        self.on_change = on_change

        self.suppliers: list[Supplier] = []
        self.editing: Optional[Supplier] = None
        self.loading = False
        self.busy = False

    def fetch(self) -> None:
        self.loading = True
        try:
            suppliers = self.svc.list_suppliers()
        except AppError as e:
            log.error("suppliers_fetch_failed error=%s", e)
            return
        finally:
            self.loading = False
        self.suppliers = suppliers

    def start_edit(self, supplier: Supplier | None) -> None:
        self.editing = supplier

    def _changed(self) -> None:
        self.fetch()
        if self.on_change is not None:
            self.on_change()

    def save(self, fields: dict) -> bool:
        if self.busy:
            return False
        data = {k: str(v).strip() for k, v in fields.items() if v is not None}

        self.busy = True
        try:
            self.session.require("manage_suppliers")
            check_required(data, REQUIRED_SUPPLIER_FIELDS)
            if self.editing is not None:
                self.svc.update(self.editing.id, data)
            else:
                self.svc.create(data)
        except AppError as e:
            log.warning("supplier_save_failed name=%s error=%s", data.get("name"), e)
            self.prompter.alert("Suppliers", error_message(e, "Failed to save supplier"))
            return False
        finally:
            self.busy = False

        self.editing = None
        self._changed()
        return True

    def delete(self, supplier: Supplier) -> bool:
        if self.busy:
            return False
        if not self.prompter.confirm("Delete supplier", "Are you sure? This might affect products linked to this supplier."):
            return False

        self.busy = True
        try:
            self.session.require("manage_suppliers")
            self.svc.delete(supplier.id)
        except AppError as e:
            log.warning("supplier_delete_failed id=%s error=%s", supplier.id, e)
            self.prompter.alert("Suppliers", error_message(e, "Failed to delete supplier"))
            return False
        finally:
            self.busy = False

        if self.editing is not None and self.editing.id == supplier.id:
            self.editing = None
        self._changed()
        return True
