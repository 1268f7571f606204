from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from invtrack.application.forms import check_required
from invtrack.application.prompter import Prompter
from invtrack.application.stock_mutation import StockMutationForm
from invtrack.domain.errors import AppError, error_message
from invtrack.domain.models import Pagination, Product, ProductPage, StockMovement, Supplier

log = logging.getLogger(__name__)

REQUIRED_PRODUCT_FIELDS = {
    "sku": "SKU",
    "name": "Name",
    "price": "Price",
    "stock": "Stock",
    "min_stock": "Min stock",
    "supplier_id": "Supplier",
}


@dataclass(frozen=True)
class Stats:
    total_products: int = 0
    low_stock_count: int = 0
    total_suppliers: int = 0


@dataclass(frozen=True)
class _FetchResult:
    suppliers: list[Supplier]
    low_stock: list[Product]
    page: ProductPage


class DashboardController:
    """Product list, supplier list, filters and counters.

    Every state change and every mutation ends in `refresh()`, which
    re-reads server state instead of patching the local lists.
    """

    def __init__(
        self,
        product_service,
        supplier_service,
        session,
        prompter: Prompter,
        page_size: int = 12,
        executor: ThreadPoolExecutor | None = None,
    ):
        self.product_svc = product_service
        self.supplier_svc = supplier_service
        self.session = session
        self.prompter = prompter
        self.page_size = page_size
        self.executor = executor or ThreadPoolExecutor(max_workers=3, thread_name_prefix="dashboard")

        self.products: list[Product] = []
        self.suppliers: list[Supplier] = []
        self.pagination: Optional[Pagination] = None
        self.stats = Stats()
        self.page = 1
        self.search = ""
        self.low_stock_only = False
        self.loading = False
        self.last_error: Optional[str] = None

        self.listeners: list[Callable[["DashboardController"], None]] = []

        self._lock = threading.Lock()
        self._generation = 0

    # ---------- fetch ----------
    def _fetch(self, page: int, search: str) -> _FetchResult:
        f_suppliers = self.executor.submit(self.supplier_svc.list_suppliers)
        f_low = self.executor.submit(self.product_svc.low_stock)
        f_page = self.executor.submit(self.product_svc.list_products, page=page, limit=self.page_size, search=search)
        # any failure aborts the whole cycle
        return _FetchResult(suppliers=f_suppliers.result(), low_stock=f_low.result(), page=f_page.result())

    def refresh(self) -> bool:
        with self._lock:
            self._generation += 1
            generation = self._generation
            page, search, low_only = self.page, self.search, self.low_stock_only
            self.loading = True

        try:
            result = self._fetch(page, search)
        except AppError as e:
            log.error("dashboard_fetch_failed generation=%s error=%s", generation, e)
            with self._lock:
                if generation == self._generation:
                    self.loading = False
                    self.last_error = str(e)
            return False

        with self._lock:
            if generation != self._generation:
                log.info("dashboard_fetch_discarded generation=%s latest=%s", generation, self._generation)
                return False

            self.suppliers = result.suppliers
            self.stats = Stats(
                total_products=result.page.total,
                low_stock_count=len(result.low_stock),
                total_suppliers=len(result.suppliers),
            )
            if low_only:
                self.products = result.low_stock
                self.pagination = None
            else:
                self.products = result.page.products
                self.pagination = result.page.pagination
            self.loading = False
            self.last_error = None

        self._notify()
        return True

    def _notify(self) -> None:
        for listener in list(self.listeners):
            listener(self)

    @property
    def show_pagination(self) -> bool:
        if self.low_stock_only or self.pagination is None:
            return False
        return self.pagination.total_pages > 1

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages if self.pagination else 1

    def can(self, action: str) -> bool:
        return self.session.can(action)

    # ---------- filters ----------
    def submit_search(self, term: str) -> bool:
        self.search = (term or "").strip()
        self.page = 1
        return self.refresh()

    def set_low_stock_only(self, enabled: bool) -> bool:
        self.low_stock_only = bool(enabled)
        self.page = 1
        return self.refresh()

    def set_page(self, page: int) -> bool:
        page = max(1, int(page))
        if self.pagination is not None and self.pagination.total_pages > 0:
            page = min(page, self.pagination.total_pages)
        self.page = page
        return self.refresh()

    def next_page(self) -> bool:
        if self.page >= self.total_pages:
            return False
        return self.set_page(self.page + 1)

    def previous_page(self) -> bool:
        if self.page <= 1:
            return False
        return self.set_page(self.page - 1)

    # ---------- mutations ----------
    def save_product(self, fields: dict, image: Path | None = None, editing: Product | None = None) -> bool:
        try:
            self.session.require("manage_products")
            check_required(fields, REQUIRED_PRODUCT_FIELDS)
            if editing is not None:
                self.product_svc.update(editing.id, fields, image)
            else:
                self.product_svc.create(fields, image)
        except AppError as e:
            log.warning("product_save_failed sku=%s error=%s", fields.get("sku"), e)
            self.prompter.alert("Product", error_message(e, "Operation failed"))
            return False

        self.refresh()
        return True

    def delete_product(self, product: Product) -> bool:
        if not self.prompter.confirm("Delete product", "Are you sure you want to delete this product?"):
            return False
        try:
            self.session.require("manage_products")
            self.product_svc.delete(product.id)
        except AppError as e:
            log.warning("product_delete_failed id=%s error=%s", product.id, e)
            self.prompter.alert("Delete product", error_message(e, "Failed to delete product"))
            return False

        self.page = 1
        self.refresh()
        return True

    def open_stock_form(self, product: Product) -> StockMutationForm:
        self.session.require("update_stock")
        return StockMutationForm(product, self.product_svc, self.prompter, on_success=self.refresh)

    def stock_history(self, product: Product) -> list[StockMovement]:
        try:
            return self.product_svc.stock_history(product.id)
        except AppError as e:
            log.error("stock_history_fetch_failed product_id=%s error=%s", product.id, e)
            return []

    def close(self) -> None:
        self.executor.shutdown(wait=False)
