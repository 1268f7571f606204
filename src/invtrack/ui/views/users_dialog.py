from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from invtrack.application.users import ROLES, UserManagement


class UsersDialog(tk.Toplevel):
    """Pending approvals first; role edits need an explicit Save."""

    def __init__(self, app, on_close=None):
        super().__init__(app)
        self.app = app
        self.on_close = on_close
        self.title("Users")
        self.protocol("WM_DELETE_WINDOW", self.close)
        self.transient(app)
        self.geometry("760x440")
        self.ctl = UserManagement(app.container.admin, app.session, app.prompter)
        self._rows: dict[str, object] = {}

        cols = ("name", "email", "role", "status")
        self.tree = ttk.Treeview(self, columns=cols, show="headings", selectmode="browse")
        for c, head, w in zip(cols, ("Name", "Email", "Role", "Status"), (180, 240, 90, 90)):
            self.tree.heading(c, text=head)
            self.tree.column(c, width=w, anchor="w")
        self.tree.tag_configure("pending", background="#fff7d6")
        self.tree.pack(fill="both", expand=True, padx=8, pady=8)
        self.tree.bind("<<TreeviewSelect>>", lambda _e: self._sync_buttons())

        bar = ttk.Frame(self)
        bar.pack(fill="x", padx=8, pady=(0, 8))
        ttk.Label(bar, text="Role").pack(side="left")
        self.role_cb = ttk.Combobox(bar, state="readonly", width=10, values=list(ROLES))
        self.role_cb.pack(side="left", padx=6)
        self.role_cb.bind("<<ComboboxSelected>>", lambda _e: self.on_role_selected())

        self.approve_btn = ttk.Button(bar, text="Approve", command=self.on_approve)
        self.approve_btn.pack(side="left", padx=4)
        self.save_btn = ttk.Button(bar, text="Save role", command=self.on_save_role)
        self.save_btn.pack(side="left", padx=4)
        self.deactivate_btn = ttk.Button(bar, text="Deactivate", command=self.on_deactivate)
        self.deactivate_btn.pack(side="left", padx=4)
        self.delete_btn = ttk.Button(bar, text="Delete", command=self.on_delete)
        self.delete_btn.pack(side="left", padx=4)

        self.reload()

    def reload(self):
        self.app.run_in_background(self.ctl.fetch, lambda _r: self.render())

    def render(self):
        if not self.winfo_exists():
            return
        for item in self.tree.get_children():
            self.tree.delete(item)
        self._rows = {}
        for u in self.ctl.users:
            iid = self.tree.insert(
                "", "end",
                values=(u.name, u.email, u.role, "Active" if u.is_active else "Pending"),
                tags=() if u.is_active else ("pending",),
            )
            self._rows[iid] = u
        self._sync_buttons()

    def _selected(self):
        sel = self.tree.selection()
        return self._rows.get(sel[0]) if sel else None

    def _sync_buttons(self):
        user = self._selected()
        buttons = (self.approve_btn, self.save_btn, self.deactivate_btn, self.delete_btn)
        if user is None:
            for b in buttons:
                b.state(["disabled"])
            self.role_cb.state(["disabled"])
            return

        self.role_cb.set(self.ctl.pending_roles.get(user.id, user.role))
        self.role_cb.state(["!disabled", "readonly"] if self.ctl.can_edit_role(user) else ["disabled"])

        enabled = {
            self.approve_btn: user.is_pending,
            self.save_btn: self.ctl.can_save_role(user),
            self.deactivate_btn: self.ctl.can_deactivate(user),
            self.delete_btn: self.ctl.can_delete(user),
        }
        for b, ok in enabled.items():
            b.state(["!disabled"] if ok else ["disabled"])

    def on_role_selected(self):
        user = self._selected()
        if user is None:
            return
        self.ctl.set_pending_role(user, self.role_cb.get())
        self._sync_buttons()

    def _run(self, action):
        user = self._selected()
        if user is None:
            return
        self.app.run_in_background(lambda: action(user), lambda _ok: self.render())

    def on_approve(self):
        self._run(self.ctl.approve)

    def on_save_role(self):
        self._run(self.ctl.save_role)

    def on_deactivate(self):
        self._run(self.ctl.deactivate)

    def on_delete(self):
        self._run(self.ctl.delete)

    def close(self):
        if self.on_close is not None:
            self.on_close()
        self.destroy()
