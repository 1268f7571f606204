from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from invtrack.application.profile import ProfileEditor


class ProfileDialog(tk.Toplevel):
    def __init__(self, app):
        super().__init__(app)
        self.app = app
        self.title("My profile")
        self.transient(app)
        self.resizable(False, False)
        self.editor = ProfileEditor(app.container.profile, app.session)

        user = app.session.current_user
        self.error_var = tk.StringVar(value="")
        self.success_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.error_var, foreground="#b91c1c").grid(
            row=0, column=0, columnspan=2, sticky="w", padx=10, pady=(10, 0)
        )
        ttk.Label(self, textvariable=self.success_var, foreground="#15803d").grid(
            row=1, column=0, columnspan=2, sticky="w", padx=10
        )

        info = ttk.LabelFrame(self, text="Account")
        info.grid(row=2, column=0, columnspan=2, sticky="ew", padx=10, pady=6)
        ttk.Label(info, text="Email").grid(row=0, column=0, sticky="w", padx=8, pady=4)
        ttk.Label(info, text=user.email if user else "").grid(row=0, column=1, sticky="w", padx=8, pady=4)
        ttk.Label(info, text="Role").grid(row=1, column=0, sticky="w", padx=8, pady=4)
        ttk.Label(info, text=user.role if user else "").grid(row=1, column=1, sticky="w", padx=8, pady=4)
        ttk.Label(info, text="Name").grid(row=2, column=0, sticky="w", padx=8, pady=4)
        self.name_entry = ttk.Entry(info, width=28)
        self.name_entry.insert(0, user.name if user else "")
        self.name_entry.grid(row=2, column=1, sticky="ew", padx=8, pady=4)
        ttk.Button(info, text="Save name", command=self.on_save_name).grid(row=3, column=1, sticky="e", padx=8, pady=6)

        pw = ttk.LabelFrame(self, text="Change password")
        pw.grid(row=3, column=0, columnspan=2, sticky="ew", padx=10, pady=(0, 10))
        self.current_pw = self._pw_entry(pw, "Current password", 0)
        self.new_pw = self._pw_entry(pw, "New password", 1)
        self.confirm_pw = self._pw_entry(pw, "Confirm new password", 2)
        ttk.Button(pw, text="Change password", command=self.on_change_password).grid(
            row=3, column=1, sticky="e", padx=8, pady=6
        )

    def _pw_entry(self, parent, label, row):
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w", padx=8, pady=4)
        e = ttk.Entry(parent, width=28, show="•")
        e.grid(row=row, column=1, sticky="ew", padx=8, pady=4)
        return e

    def _show(self, _ok=None):
        if not self.winfo_exists():
            return
        self.error_var.set(self.editor.error)
        self.success_var.set(self.editor.success)

    def on_save_name(self):
        name = self.name_entry.get()
        self.app.run_in_background(lambda: self.editor.update_name(name), self._show)

    def on_change_password(self):
        current, new, confirm = self.current_pw.get(), self.new_pw.get(), self.confirm_pw.get()

        def done(ok: bool):
            self._show()
            if ok and self.winfo_exists():
                for e in (self.current_pw, self.new_pw, self.confirm_pw):
                    e.delete(0, tk.END)

        self.app.run_in_background(lambda: self.editor.change_password(current, new, confirm), done)
