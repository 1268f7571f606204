from __future__ import annotations

import logging
import tkinter as tk
from pathlib import Path
from tkinter import ttk, filedialog

from invtrack.domain.errors import AppError

log = logging.getLogger(__name__)


class ProductDialog(tk.Toplevel):
    def __init__(self, app, dashboard, categories, product=None):
        super().__init__(app)
        self.app = app
        self.dashboard = dashboard
        self.product = product
        self.image_path: Path | None = None
        self.categories = []
        self.title("Edit product" if product else "Add product")
        self.transient(app)
        self.resizable(False, False)

        self.p_sku = self._entry("SKU", 0)
        self.p_name = self._entry("Name", 1)
        self.p_desc = self._entry("Description", 2)
        self.p_price = self._entry("Price", 3)
        self.p_stock = self._entry("Stock", 4)
        self.p_min = self._entry("Min stock", 5)

        ttk.Label(self, text="Supplier").grid(row=6, column=0, sticky="w", padx=8, pady=4)
        self.supplier_cb = ttk.Combobox(self, state="readonly", width=28,
                                        values=[s.name for s in dashboard.suppliers])
        self.supplier_cb.grid(row=6, column=1, sticky="ew", padx=8, pady=4)

        ttk.Label(self, text="Category").grid(row=7, column=0, sticky="w", padx=8, pady=4)
        self.category_cb = ttk.Combobox(self, state="readonly", width=28, values=["(none)"])
        self.category_cb.grid(row=7, column=1, sticky="ew", padx=8, pady=4)

        ttk.Button(self, text="Choose image...", command=self.choose_image).grid(row=8, column=0, sticky="w", padx=8, pady=4)
        self.image_label = ttk.Label(self, text="No image selected")
        self.image_label.grid(row=8, column=1, sticky="w", padx=8, pady=4)

        btns = ttk.Frame(self)
        btns.grid(row=9, column=0, columnspan=2, sticky="ew", padx=8, pady=(6, 10))
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side="right")
        ttk.Button(btns, text="Save", command=self.on_save).pack(side="right", padx=6)

        if product is not None:
            self._fill(product)

        app.run_in_background(lambda: self._load_categories(categories), self._set_categories)

    def _entry(self, label, row):
        ttk.Label(self, text=label).grid(row=row, column=0, sticky="w", padx=8, pady=4)
        e = ttk.Entry(self, width=30)
        e.grid(row=row, column=1, sticky="ew", padx=8, pady=4)
        return e

    def _fill(self, p):
        for entry, value in (
            (self.p_sku, p.sku), (self.p_name, p.name), (self.p_desc, p.description),
            (self.p_price, f"{p.price:g}"), (self.p_stock, p.stock), (self.p_min, p.min_stock),
        ):
            entry.insert(0, str(value))
        # once a product exists its stock only moves through stock movements
        self.p_stock.state(["disabled"])
        for s in self.dashboard.suppliers:
            if s.id == p.supplier_id:
                self.supplier_cb.set(s.name)

    @staticmethod
    def _load_categories(service):
        try:
            return service.list_categories()
        except AppError as e:
            log.error("categories_fetch_failed error=%s", e)
            return []

    def _set_categories(self, categories):
        if not self.winfo_exists():
            return
        self.categories = categories
        self.category_cb.config(values=["(none)"] + [c.name for c in categories])
        current = next((c for c in categories if self.product and c.id == self.product.category_id), None)
        self.category_cb.set(current.name if current else "(none)")

    def choose_image(self):
        path = filedialog.askopenfilename(
            title="Select product image",
            filetypes=[("Images", "*.png *.jpg *.jpeg *.webp"), ("All files", "*.*")],
            parent=self,
        )
        if path:
            self.image_path = Path(path)
            self.image_label.config(text=self.image_path.name)

    def _fields(self) -> dict:
        supplier = next((s for s in self.dashboard.suppliers if s.name == self.supplier_cb.get()), None)
        category = next((c for c in self.categories if c.name == self.category_cb.get()), None)
        return {
            "sku": self.p_sku.get().strip(),
            "name": self.p_name.get().strip(),
            "description": self.p_desc.get().strip(),
            "price": self.p_price.get().strip(),
            "stock": self.p_stock.get().strip(),
            "min_stock": self.p_min.get().strip(),
            "supplier_id": supplier.id if supplier else "",
            "category_id": category.id if category else None,
        }

    def on_save(self):
        fields = self._fields()
        image = self.image_path

        def done(ok: bool):
            if ok:
                self.app.toast("Product saved.", kind="success")
                if self.winfo_exists():
                    self.destroy()

        self.app.run_in_background(lambda: self.dashboard.save_product(fields, image, editing=self.product), done)
