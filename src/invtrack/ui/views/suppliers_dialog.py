from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from invtrack.application.suppliers import SupplierManagement


class SuppliersDialog(tk.Toplevel):
    def __init__(self, app, on_change=None):
        super().__init__(app)
        self.app = app
        self.title("Suppliers")
        self.transient(app)
        self.geometry("760x420")
        self.ctl = SupplierManagement(app.container.suppliers, app.session, app.prompter, on_change=on_change)

        left = ttk.LabelFrame(self, text="Supplier")
        left.pack(side="left", fill="y", padx=8, pady=8)
        self.entries = {}
        for row, (key, label) in enumerate((
            ("name", "Company name"), ("contact_name", "Contact name"),
            ("phone", "Phone"), ("email", "Email"), ("address", "Address"),
        )):
            ttk.Label(left, text=label).grid(row=row, column=0, sticky="w", padx=8, pady=4)
            e = ttk.Entry(left, width=24)
            e.grid(row=row, column=1, sticky="ew", padx=8, pady=4)
            self.entries[key] = e

        btns = ttk.Frame(left)
        btns.grid(row=5, column=0, columnspan=2, sticky="ew", padx=8, pady=8)
        self.save_btn = ttk.Button(btns, text="Add", command=self.on_save)
        self.save_btn.pack(side="left")
        ttk.Button(btns, text="Clear", command=self.clear_form).pack(side="left", padx=6)

        right = ttk.Frame(self)
        right.pack(side="right", fill="both", expand=True, padx=8, pady=8)
        cols = ("name", "contact", "phone", "email")
        self.tree = ttk.Treeview(right, columns=cols, show="headings", selectmode="browse")
        for c, head in zip(cols, ("Company", "Contact", "Phone", "Email")):
            self.tree.heading(c, text=head)
            self.tree.column(c, width=110, anchor="w")
        self.tree.pack(fill="both", expand=True)

        actions = ttk.Frame(right)
        actions.pack(fill="x", pady=(6, 0))
        ttk.Button(actions, text="Edit", command=self.on_edit).pack(side="left")
        ttk.Button(actions, text="Delete", command=self.on_delete).pack(side="left", padx=6)

        self.reload()

    def reload(self):
        self.app.run_in_background(self.ctl.fetch, lambda _r: self.render())

    def render(self):
        if not self.winfo_exists():
            return
        for item in self.tree.get_children():
            self.tree.delete(item)
        for s in self.ctl.suppliers:
            self.tree.insert("", "end", iid=str(s.id), values=(s.name, s.contact_name, s.phone, s.email))
        self.save_btn.config(text="Update" if self.ctl.editing else "Add")

    def _selected(self):
        sel = self.tree.selection()
        if not sel:
            return None
        return next((s for s in self.ctl.suppliers if str(s.id) == sel[0]), None)

    def clear_form(self):
        for e in self.entries.values():
            e.delete(0, tk.END)
        self.ctl.start_edit(None)
        self.save_btn.config(text="Add")

    def on_edit(self):
        supplier = self._selected()
        if supplier is None:
            return
        self.clear_form()
        self.ctl.start_edit(supplier)
        for key, e in self.entries.items():
            e.insert(0, getattr(supplier, key))
        self.save_btn.config(text="Update")

    def on_save(self):
        fields = {key: e.get() for key, e in self.entries.items()}

        def done(ok: bool):
            if ok and self.winfo_exists():
                self.clear_form()
                self.render()

        self.app.run_in_background(lambda: self.ctl.save(fields), done)

    def on_delete(self):
        supplier = self._selected()
        if supplier is None:
            return
        self.app.run_in_background(lambda: self.ctl.delete(supplier), lambda _ok: self.render())
