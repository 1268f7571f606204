from __future__ import annotations

import logging

from invtrack.domain.models import Category
from invtrack.services.payload import parsed

log = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, repo):
        self.repo = repo

    def list_categories(self) -> list[Category]:
        data = self.repo.get("/categories") or []
        with parsed("categories"):
            return [Category.from_dict(c) for c in data]

    def create(self, data: dict) -> Category:
        result = self.repo.post("/categories", json=data) or {}
        log.info("category_created name=%s", data.get("name"))
        with parsed("category"):
            return Category.from_dict(result)

    def update(self, category_id: int, data: dict) -> Category:
        result = self.repo.put(f"/categories/{int(category_id)}", json=data) or {}
        log.info("category_updated id=%s", category_id)
        with parsed("category"):
            return Category.from_dict(result)

    def delete(self, category_id: int) -> None:
        self.repo.delete(f"/categories/{int(category_id)}")
        log.info("category_deleted id=%s", category_id)
