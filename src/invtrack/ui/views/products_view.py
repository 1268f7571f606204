from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk, filedialog

from invtrack.application.users import pending_count
from invtrack.domain.errors import AppError
from invtrack.ui.views.categories_dialog import CategoriesDialog
from invtrack.ui.views.history_dialog import HistoryDialog
from invtrack.ui.views.logs_dialog import LogsDialog
from invtrack.ui.views.product_dialog import ProductDialog
from invtrack.ui.views.profile_dialog import ProfileDialog
from invtrack.ui.views.stock_dialog import StockDialog
from invtrack.ui.views.suppliers_dialog import SuppliersDialog
from invtrack.ui.views.users_dialog import UsersDialog

log = logging.getLogger(__name__)

ADMIN_TOOLS = (
    ("users", "manage_users", "👥 Approvals"),
    ("logs", "view_activity_logs", "📜 Activity log"),
    ("export", "export_data", "📊 Export products"),
)


def admin_tools(can) -> list[tuple[str, str]]:
    """(key, label) of the role-gated sidebar buttons the current user may see."""
    return [(key, label) for key, action, label in ADMIN_TOOLS if can(action)]


class ProductsView:
    def __init__(self, parent: tk.Misc, app, dashboard):
        self.app = app
        self.dashboard = dashboard
        self.frame = ttk.Frame(parent)
        self._rows: dict[str, object] = {}

        self.search_var = tk.StringVar(value="")
        self.filter_var = tk.StringVar(value="all")
        self.page_var = tk.StringVar(value="")

        self._build_topbar()

        main = ttk.Frame(self.frame)
        main.pack(fill="both", expand=True)

        self.sidebar = ttk.Frame(main)
        self.sidebar.pack(side="left", fill="y", padx=(0, 10))
        self._build_sidebar()

        right = ttk.LabelFrame(main, text="Products")
        right.pack(side="right", fill="both", expand=True)
        self._build_toolbar(right)
        self._build_tree(right)
        self._build_pagination(right)

        # refresh cycles finish on worker threads
        dashboard.listeners.append(lambda _c: self.app.post(self.render))

    # ---------- layout ----------
    def _build_topbar(self):
        top = ttk.Frame(self.frame)
        top.pack(fill="x", pady=(0, 8))

        user = self.app.session.current_user
        who = f"{user.name} ({user.role})" if user else ""
        ttk.Label(top, text="Inventory Tracker", style="Title.TLabel").pack(side="left")
        ttk.Button(top, text="Sign out", command=self.app.logout).pack(side="right")
        ttk.Button(top, text="Profile", command=self.open_profile).pack(side="right", padx=6)
        ttk.Label(top, text=who).pack(side="right", padx=10)

    def _build_sidebar(self):
        kpi = ttk.LabelFrame(self.sidebar, text="Overview")
        kpi.pack(fill="x")

        self.k_products = ttk.Label(kpi, text="-", style="KPIValue.TLabel")
        self.k_low = ttk.Label(kpi, text="-", style="KPIValue.TLabel")
        self.k_suppliers = ttk.Label(kpi, text="-", style="KPIValue.TLabel")

        labels = ["Total products", "Low stock", "Suppliers"]
        widgets = [self.k_products, self.k_low, self.k_suppliers]
        for i, (lab, w) in enumerate(zip(labels, widgets)):
            ttk.Label(kpi, text=lab, style="KPI.TLabel").grid(
                row=i, column=0, sticky="w", padx=10, pady=(8 if i == 0 else 2, 2)
            )
            w.grid(row=i, column=1, sticky="e", padx=10, pady=(8 if i == 0 else 2, 2))
        kpi.columnconfigure(0, weight=1)
        kpi.columnconfigure(1, weight=1)

        self.manage_box = None
        self._build_manage_box()

    def _build_manage_box(self):
        # rebuilt whenever the current user's role may have changed
        if self.manage_box is not None:
            self.manage_box.destroy()
        self.approvals_btn = None

        box = ttk.LabelFrame(self.sidebar, text="Manage")
        box.pack(fill="x", pady=(10, 0))
        self.manage_box = box

        ttk.Button(box, text="🚚 Suppliers", style="Big.TButton", command=self.open_suppliers).pack(fill="x", padx=10, pady=(10, 6))
        ttk.Button(box, text="🏷 Categories", style="Big.TButton", command=self.open_categories).pack(fill="x", padx=10, pady=6)

        commands = {"users": self.open_users, "logs": self.open_logs, "export": self.export_products}
        for key, label in admin_tools(self.app.can_action):
            btn = ttk.Button(box, text=label, style="Big.TButton", command=commands[key])
            btn.pack(fill="x", padx=10, pady=6)
            if key == "users":
                self.approvals_btn = btn
        if self.approvals_btn is not None:
            self.update_pending_badge()

        ttk.Button(box, text="🔄 Refresh", style="Big.TButton", command=self.app.refresh_dashboard).pack(fill="x", padx=10, pady=(6, 10))

    def _build_toolbar(self, parent):
        bar = ttk.Frame(parent)
        bar.pack(fill="x", padx=6, pady=(6, 0))

        search = ttk.Entry(bar, textvariable=self.search_var, width=30)
        search.pack(side="left")
        search.bind("<Return>", lambda _e: self.on_search())
        ttk.Button(bar, text="Search", command=self.on_search).pack(side="left", padx=6)

        ttk.Radiobutton(bar, text="All", value="all", variable=self.filter_var, command=self.on_filter).pack(side="left", padx=(12, 4))
        ttk.Radiobutton(bar, text="Low stock", value="low", variable=self.filter_var, command=self.on_filter).pack(side="left", padx=4)

        ttk.Button(bar, text="History", command=self.on_history).pack(side="right")
        ttk.Button(bar, text="Stock", command=self.on_stock).pack(side="right", padx=4)
        ttk.Button(bar, text="Delete", command=self.on_delete).pack(side="right", padx=4)
        ttk.Button(bar, text="Edit", command=self.on_edit).pack(side="right", padx=4)
        ttk.Button(bar, text="Add", command=self.on_add).pack(side="right", padx=4)

    def _build_tree(self, parent):
        tree_wrap = ttk.Frame(parent)
        tree_wrap.pack(fill="both", expand=True, padx=6, pady=6)

        cols = ("id", "sku", "name", "supplier", "category", "price", "stock", "min")
        self.tree = ttk.Treeview(tree_wrap, columns=cols, show="headings", height=18, selectmode="browse")
        heads = {
            "id": "ID", "sku": "SKU", "name": "Name", "supplier": "Supplier",
            "category": "Category", "price": "Price", "stock": "Stock", "min": "Min",
        }
        widths = {"id": 48, "sku": 110, "name": 260, "supplier": 150, "category": 120, "price": 90, "stock": 70, "min": 70}
        for c in cols:
            self.tree.heading(c, text=heads[c])
            self.tree.column(c, width=widths[c], anchor="w")

        self.tree.tag_configure("low", background="#ffdddd")
        self.tree.bind("<Double-1>", lambda _e: self.on_stock())

        vsb = ttk.Scrollbar(tree_wrap, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        tree_wrap.columnconfigure(0, weight=1)
        tree_wrap.rowconfigure(0, weight=1)

        self.empty_label = ttk.Label(parent, text="")

    def _build_pagination(self, parent):
        self.pager = ttk.Frame(parent)
        self.prev_btn = ttk.Button(self.pager, text="◀", width=3, command=self.on_prev)
        self.prev_btn.pack(side="left")
        ttk.Label(self.pager, textvariable=self.page_var).pack(side="left", padx=10)
        self.next_btn = ttk.Button(self.pager, text="▶", width=3, command=self.on_next)
        self.next_btn.pack(side="left")

    # ---------- render ----------
    def render(self):
        if not self.frame.winfo_exists():
            return
        d = self.dashboard

        self.k_products.config(text=str(d.stats.total_products))
        self.k_low.config(text=str(d.stats.low_stock_count))
        self.k_suppliers.config(text=str(d.stats.total_suppliers))

        for item in self.tree.get_children():
            self.tree.delete(item)
        self._rows = {}
        for p in d.products:
            iid = self.tree.insert(
                "", "end",
                values=(p.id, p.sku, p.name, p.supplier_name or "-", p.category_name or "-",
                        f"{p.price:,.0f}", p.stock, p.min_stock),
                tags=("low",) if p.is_low_stock else (),
            )
            self._rows[iid] = p

        if not d.products:
            text = f'No results found for "{d.search}"' if d.search else "Get started by adding your first product."
            self.empty_label.config(text=text)
            self.empty_label.pack(pady=4)
        else:
            self.empty_label.pack_forget()

        if d.show_pagination:
            self.page_var.set(f"Page {d.page} of {d.total_pages}")
            self.prev_btn.state(["disabled"] if d.page <= 1 else ["!disabled"])
            self.next_btn.state(["disabled"] if d.page >= d.total_pages else ["!disabled"])
            self.pager.pack(pady=(0, 6))
        else:
            self.pager.pack_forget()

    def _selected(self):
        sel = self.tree.selection()
        if not sel:
            self.app.toast("Select a product first.", kind="warn")
            return None
        return self._rows.get(sel[0])

    # ---------- filters ----------
    def on_search(self):
        term = self.search_var.get()
        self.app.run_in_background(lambda: self.dashboard.submit_search(term))

    def on_filter(self):
        low = self.filter_var.get() == "low"
        self.app.run_in_background(lambda: self.dashboard.set_low_stock_only(low))

    def on_prev(self):
        self.app.run_in_background(self.dashboard.previous_page)

    def on_next(self):
        self.app.run_in_background(self.dashboard.next_page)

    # ---------- actions ----------
    def on_add(self):
        ProductDialog(self.app, self.dashboard, categories=self.app.container.categories, product=None)

    def on_edit(self):
        product = self._selected()
        if product is None:
            return
        ProductDialog(self.app, self.dashboard, categories=self.app.container.categories, product=product)

    def on_delete(self):
        product = self._selected()
        if product is None:
            return

        def done(ok: bool):
            if ok:
                self.app.toast("Product deleted.", kind="success")

        self.app.run_in_background(lambda: self.dashboard.delete_product(product), done)

    def on_stock(self):
        product = self._selected()
        if product is None:
            return
        try:
            form = self.dashboard.open_stock_form(product)
        except AppError as e:
            self.app.handle_error("Update stock", e, "Stock update not allowed.")
            return
        StockDialog(self.app, form)

    def on_history(self):
        product = self._selected()
        if product is None:
            return
        HistoryDialog(self.app, self.dashboard, product)

    def open_suppliers(self):
        SuppliersDialog(self.app, on_change=self._refresh_later)

    def open_categories(self):
        CategoriesDialog(self.app, on_change=self._refresh_later)

    def update_pending_badge(self):
        admin = self.app.container.admin

        def done(count: int):
            btn = self.approvals_btn
            if btn is not None and btn.winfo_exists():
                btn.config(text=f"👥 Approvals ({count})" if count else "👥 Approvals")

        self.app.run_in_background(lambda: pending_count(admin), done)

    def open_users(self):
        UsersDialog(self.app, on_close=self._build_manage_box)

    def open_logs(self):
        LogsDialog(self.app)

    def open_profile(self):
        ProfileDialog(self.app)

    def export_products(self):
        target = filedialog.askdirectory(title="Save export to", initialdir=str(self.app.container.paths.exports_dir))
        if not target:
            return

        def work():
            try:
                return self.app.container.exports.download_products(target), None
            except AppError as e:
                return None, e

        def done(outcome):
            result, err = outcome
            if err is not None:
                self.app.handle_error("Export error", err, "Failed to export products.")
                return
            log.info("products_exported path=%s rows=%s", result.path, result.rows)
            rows = f", {result.rows} rows" if result.rows is not None else ""
            self.app.toast(f"Exported {result.path.name}{rows}.", kind="success")

        self.app.run_in_background(work, done)

    def _refresh_later(self):
        # called from dialog worker threads
        self.app.post(self.app.refresh_dashboard)
