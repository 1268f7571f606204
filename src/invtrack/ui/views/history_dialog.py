from __future__ import annotations

import tkinter as tk
from tkinter import ttk


class HistoryDialog(tk.Toplevel):
    def __init__(self, app, dashboard, product):
        super().__init__(app)
        self.title(f"Stock history - {product.name}")
        self.transient(app)
        self.geometry("640x360")

        cols = ("date", "type", "qty", "balance", "note")
        self.tree = ttk.Treeview(self, columns=cols, show="headings")
        for c, head, width in (
            ("date", "Date", 150), ("type", "Type", 60), ("qty", "Qty", 60),
            ("balance", "Before → After", 120), ("note", "Note", 220),
        ):
            self.tree.heading(c, text=head)
            self.tree.column(c, width=width, anchor="w")
        self.tree.tag_configure("out", foreground="#b91c1c")
        self.tree.tag_configure("in", foreground="#15803d")
        self.tree.pack(fill="both", expand=True, padx=10, pady=10)

        self.status = ttk.Label(self, text="Loading...")
        self.status.pack(anchor="w", padx=10, pady=(0, 10))

        app.run_in_background(lambda: dashboard.stock_history(product), self.render)

    def render(self, history):
        if not self.winfo_exists():
            return
        for m in history:
            sign = "+" if m.type == "in" else "-"
            self.tree.insert(
                "", "end",
                values=(m.created_at[:16].replace("T", " "), m.type.upper(), f"{sign}{m.quantity}",
                        f"{m.stock_before} → {m.stock_after}", m.note or ""),
                tags=(m.type,),
            )
        self.status.config(text=f"{len(history)} movements" if history else "No stock movements yet.")
