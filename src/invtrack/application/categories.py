from __future__ import annotations

import logging
from typing import Callable, Optional

from invtrack.application.forms import check_required
from invtrack.application.prompter import Prompter
from invtrack.domain.errors import AppError, error_message
from invtrack.domain.models import Category

log = logging.getLogger(__name__)


class CategoryManagement:
    def __init__(self, category_service, session, prompter: Prompter, on_change: Callable[[], None] | None = None):
        self.svc = category_service
        self.session = session
        self.prompter = prompter
        self.on_change = on_change

        self.categories: list[Category] = []
        self.editing: Optional[Category] = None
        self.loading = False
        self.busy = False

    def fetch(self) -> None:
        self.loading = True
        try:
            categories = self.svc.list_categories()
        except AppError as e:
            log.error("categories_fetch_failed error=%s", e)
            return
        finally:
            self.loading = False
        self.categories = categories

    def start_edit(self, category: Category | None) -> None:
        self.editing = category

    def _changed(self) -> None:
        self.fetch()
        if self.on_change is not None:
            self.on_change()

    def save(self, name: str) -> bool:
        if self.busy:
            return False
        data = {"name": (name or "").strip()}

        self.busy = True
        try:
            self.session.require("manage_categories")
            check_required(data, {"name": "Category name"})
            if self.editing is not None:
                self.svc.update(self.editing.id, data)
            else:
                self.svc.create(data)
        except AppError as e:
            log.warning("category_save_failed name=%s error=%s", data["name"], e)
            self.prompter.alert("Categories", error_message(e, "Failed to save category"))
            return False
        finally:
            self.busy = False

        self.editing = None
        self._changed()
        return True

    def delete(self, category: Category) -> bool:
        if self.busy:
            return False
        if not self.prompter.confirm(
            "Delete category",
            "Delete this category? Products in this category will not be deleted but will have no category.",
        ):
            return False

        self.busy = True
        try:
            self.session.require("manage_categories")
            self.svc.delete(category.id)
        except AppError as e:
            log.warning("category_delete_failed id=%s error=%s", category.id, e)
            self.prompter.alert("Categories", error_message(e, "Failed to delete category"))
            return False
        finally:
            self.busy = False

        self._changed()
        return True
