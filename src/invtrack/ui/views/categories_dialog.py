from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from invtrack.application.categories import CategoryManagement


class CategoriesDialog(tk.Toplevel):
    def __init__(self, app, on_change=None):
        super().__init__(app)
        self.app = app
        self.title("Categories")
        self.transient(app)
        self.geometry("420x380")
        self.ctl = CategoryManagement(app.container.categories, app.session, app.prompter, on_change=on_change)

        form = ttk.Frame(self)
        form.pack(fill="x", padx=8, pady=8)
        self.name_var = tk.StringVar(value="")
        entry = ttk.Entry(form, textvariable=self.name_var, width=28)
        entry.pack(side="left")
        entry.bind("<Return>", lambda _e: self.on_save())
        self.save_btn = ttk.Button(form, text="Add", command=self.on_save)
        self.save_btn.pack(side="left", padx=6)
        ttk.Button(form, text="Clear", command=self.clear_form).pack(side="left")

        self.listbox = tk.Listbox(self, height=12)
        self.listbox.pack(fill="both", expand=True, padx=8)

        actions = ttk.Frame(self)
        actions.pack(fill="x", padx=8, pady=8)
        ttk.Button(actions, text="Edit", command=self.on_edit).pack(side="left")
        ttk.Button(actions, text="Delete", command=self.on_delete).pack(side="left", padx=6)

        self.app.run_in_background(self.ctl.fetch, lambda _r: self.render())

    def render(self):
        if not self.winfo_exists():
            return
        self.listbox.delete(0, tk.END)
        for c in self.ctl.categories:
            self.listbox.insert(tk.END, c.name)

    def _selected(self):
        sel = self.listbox.curselection()
        if not sel:
            return None
        return self.ctl.categories[sel[0]]

    def clear_form(self):
        self.name_var.set("")
        self.ctl.start_edit(None)
        self.save_btn.config(text="Add")

    def on_edit(self):
        category = self._selected()
        if category is None:
            return
        self.ctl.start_edit(category)
        self.name_var.set(category.name)
        self.save_btn.config(text="Update")

    def on_save(self):
        name = self.name_var.get()

        def done(ok: bool):
            if ok and self.winfo_exists():
                self.clear_form()
                self.render()

        self.app.run_in_background(lambda: self.ctl.save(name), done)

    def on_delete(self):
        category = self._selected()
        if category is None:
            return
        self.app.run_in_background(lambda: self.ctl.delete(category), lambda _ok: self.render())
