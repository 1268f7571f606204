from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from invtrack.domain.errors import ValidationError
from invtrack.domain.models import Pagination, Product, ProductPage, StockMovement
from invtrack.services.payload import parsed

log = logging.getLogger(__name__)
stock_log = logging.getLogger("invtrack.stock")

PRODUCT_FIELDS = ("sku", "name", "description", "price", "stock", "min_stock", "supplier_id", "category_id")


def _multipart(fields: dict, image: Optional[Path]) -> dict:
    parts = {}
    for key in PRODUCT_FIELDS:
        value = fields.get(key)
        if value is None or value == "":
            # category is optional; everything else is checked by the form
            if key == "category_id":
                continue
            value = ""
        parts[key] = (None, str(value))
    if image is not None:
        image = Path(image)
        try:
            content = image.read_bytes()
        except OSError as exc:
            raise ValidationError(f"Cannot read image {image.name}") from exc
        parts["image"] = (image.name, content)
    return parts


class ProductService:
    def __init__(self, repo):
        self.repo = repo

    def list_products(self, page: int | None = None, limit: int | None = None, search: str | None = None) -> ProductPage:
        params = {}
        if page:
            params["page"] = page
        if limit:
            params["limit"] = limit
        if search:
            params["search"] = search

        data = self.repo.get("/products", params=params or None) or {}
        with parsed("products"):
            products = [Product.from_dict(p) for p in data.get("products") or []]
            pagination = Pagination.from_dict(data["pagination"]) if data.get("pagination") else None
        return ProductPage(products=products, pagination=pagination)

    def get_product(self, product_id: int) -> Product:
        data = self.repo.get(f"/products/{int(product_id)}") or {}
        with parsed("product"):
            return Product.from_dict(data.get("product") or {})

    def create(self, fields: dict, image: Path | None = None) -> dict:
        result = self.repo.post("/products", files=_multipart(fields, image))
        log.info("product_created sku=%s", fields.get("sku"))
        return result or {}

    def update(self, product_id: int, fields: dict, image: Path | None = None) -> dict:
        result = self.repo.put(f"/products/{int(product_id)}", files=_multipart(fields, image))
        log.info("product_updated id=%s", product_id)
        return result or {}

    def delete(self, product_id: int) -> None:
        self.repo.delete(f"/products/{int(product_id)}")
        log.info("product_deleted id=%s", product_id)

    def low_stock(self) -> list[Product]:
        data = self.repo.get("/products/low-stock") or {}
        with parsed("low_stock"):
            return [Product.from_dict(p) for p in data.get("products") or []]

    def update_stock(self, product_id: int, movement_type: str, quantity: int, note: str = "") -> dict:
        body = {"type": movement_type, "quantity": int(quantity), "note": note}
        result = self.repo.post(f"/products/{int(product_id)}/stock", json=body) or {}
        stock_log.info(
            "stock_movement product_id=%s type=%s qty=%s before=%s after=%s",
            product_id, movement_type, quantity, result.get("stock_before"), result.get("stock_after"),
        )
        return result

    def stock_history(self, product_id: int) -> list[StockMovement]:
        data = self.repo.get(f"/products/{int(product_id)}/history") or {}
        with parsed("stock_history"):
            return [StockMovement.from_dict(h) for h in data.get("history") or []]
