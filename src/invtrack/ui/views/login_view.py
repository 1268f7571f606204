from __future__ import annotations

import logging
import tkinter as tk
from tkinter import ttk

from invtrack.domain.errors import AppError, error_message

log = logging.getLogger(__name__)


class LoginView:
    """Sign in / create account. Errors show inline, not as pop-ups."""

    def __init__(self, parent: tk.Misc, app):
        self.app = app
        self.frame = ttk.Frame(parent)
        self.mode = tk.StringVar(value="login")
        self.error_var = tk.StringVar(value="")

        box = ttk.LabelFrame(self.frame, text="Inventory Tracker")
        box.place(relx=0.5, rely=0.45, anchor="center")

        ttk.Label(box, textvariable=self.error_var, foreground="#b91c1c", wraplength=320).grid(row=0, column=0, columnspan=2, sticky="w", padx=10, pady=(10, 4))

        self.name_label = ttk.Label(box, text="Full name")
        self.name_entry = ttk.Entry(box, width=32)
        self.email_entry = self._entry(box, "Email or username", 2)
        self.password_entry = self._entry(box, "Password", 3, show="•")

        btns = ttk.Frame(box)
        btns.grid(row=4, column=0, columnspan=2, sticky="ew", padx=10, pady=(8, 10))
        self.submit_btn = ttk.Button(btns, text="Sign in", style="Big.TButton", command=self.on_submit)
        self.submit_btn.pack(side="left")
        self.switch_btn = ttk.Button(btns, text="Create account", command=self.toggle_mode)
        self.switch_btn.pack(side="right")

        for entry in (self.name_entry, self.email_entry, self.password_entry):
            entry.bind("<Return>", lambda _e: self.on_submit())
        self.email_entry.focus_set()

    def _entry(self, parent, label, row, show=None):
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w", padx=10, pady=4)
        e = ttk.Entry(parent, width=32, show=show or "")
        e.grid(row=row, column=1, sticky="ew", padx=10, pady=4)
        return e

    def toggle_mode(self):
        self.error_var.set("")
        if self.mode.get() == "login":
            self.mode.set("register")
            self.name_label.grid(row=1, column=0, sticky="w", padx=10, pady=4)
            self.name_entry.grid(row=1, column=1, sticky="ew", padx=10, pady=4)
            self.submit_btn.config(text="Create account")
            self.switch_btn.config(text="Sign in instead")
        else:
            self.mode.set("login")
            self.name_label.grid_remove()
            self.name_entry.grid_remove()
            self.submit_btn.config(text="Sign in")
            self.switch_btn.config(text="Create account")

    def on_submit(self):
        self.error_var.set("")
        email = self.email_entry.get().strip()
        password = self.password_entry.get()
        session = self.app.session
        registering = self.mode.get() == "register"

        self.submit_btn.state(["disabled"])
        try:
            if registering:
                session.register(self.name_entry.get(), email, password)
            else:
                session.login(email, password)
        except AppError as e:
            fallback = "Registration failed. Please try again." if registering else "Login failed. Please try again."
            log.info("auth_form_rejected mode=%s error=%s", self.mode.get(), e)
            self.error_var.set(error_message(e, fallback))
            return
        finally:
            if self.submit_btn.winfo_exists():
                self.submit_btn.state(["!disabled"])

        self.app.toast(f"Welcome, {session.current_user.name}.", kind="success")
        self.app.show_dashboard()
