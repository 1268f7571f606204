from __future__ import annotations

import tkinter as tk
from tkinter import ttk


class StockDialog(tk.Toplevel):
    """Stock in/out entry with a live projected balance."""

    def __init__(self, app, form):
        super().__init__(app)
        self.app = app
        self.form = form
        self.title("Update stock")
        self.transient(app)
        self.resizable(False, False)

        self.direction = tk.StringVar(value=form.direction)
        self.qty_var = tk.StringVar(value="")
        self.preview_var = tk.StringVar(value="")

        p = form.product
        ttk.Label(self, text=p.name, style="Title.TLabel").grid(row=0, column=0, columnspan=2, sticky="w", padx=12, pady=(12, 2))
        ttk.Label(self, text=f"Current stock: {p.stock} pcs").grid(row=1, column=0, columnspan=2, sticky="w", padx=12)

        types = ttk.Frame(self)
        types.grid(row=2, column=0, columnspan=2, sticky="w", padx=12, pady=8)
        ttk.Radiobutton(types, text="Stock in", value="in", variable=self.direction, command=self._on_change).pack(side="left")
        ttk.Radiobutton(types, text="Stock out", value="out", variable=self.direction, command=self._on_change).pack(side="left", padx=12)

        ttk.Label(self, text="Quantity").grid(row=3, column=0, sticky="w", padx=12, pady=4)
        qty = ttk.Entry(self, textvariable=self.qty_var, width=12)
        qty.grid(row=3, column=1, sticky="w", padx=12, pady=4)
        self.qty_var.trace_add("write", lambda *_: self._on_change())

        ttk.Label(self, text="Note (optional)").grid(row=4, column=0, sticky="nw", padx=12, pady=4)
        self.note = tk.Text(self, width=32, height=3)
        self.note.grid(row=4, column=1, sticky="ew", padx=12, pady=4)

        ttk.Label(self, textvariable=self.preview_var, style="KPIValue.TLabel").grid(row=5, column=0, columnspan=2, sticky="w", padx=12, pady=6)

        btns = ttk.Frame(self)
        btns.grid(row=6, column=0, columnspan=2, sticky="ew", padx=12, pady=(6, 12))
        ttk.Button(btns, text="Cancel", command=self.on_cancel).pack(side="right")
        self.submit_btn = ttk.Button(btns, text="Confirm update", command=self.on_submit)
        self.submit_btn.pack(side="right", padx=6)

        self.protocol("WM_DELETE_WINDOW", self.on_cancel)
        qty.focus_set()
        self._on_change()

    def _on_change(self):
        self.form.set_direction(self.direction.get())
        self.form.quantity_text = self.qty_var.get()
        projected = self.form.projected_balance()
        self.preview_var.set("" if projected is None else f"New stock balance: {projected} pcs")
        self.submit_btn.state(["!disabled"] if self.form.can_submit() else ["disabled"])

    def on_submit(self):
        self.form.note = self.note.get("1.0", "end").strip()
        self.submit_btn.state(["disabled"])

        def done(ok: bool):
            if ok:
                self.app.toast("Stock updated.", kind="success")
                if self.winfo_exists():
                    self.destroy()
            elif self.winfo_exists():
                self._on_change()

        self.app.run_in_background(self.form.submit, done)

    def on_cancel(self):
        self.form.close()
        if self.form.closed:
            self.destroy()
