from __future__ import annotations

import tkinter as tk
from tkinter import ttk, filedialog

from invtrack.application.activity_log import ALL_ACTIONS, ActivityLogViewer
from invtrack.domain.models import LOG_ACTIONS


class LogsDialog(tk.Toplevel):
    def __init__(self, app):
        super().__init__(app)
        self.app = app
        self.title("Activity log")
        self.transient(app)
        self.geometry("900x460")
        c = app.container
        self.viewer = ActivityLogViewer(c.admin, c.exports, app.session, app.prompter)

        bar = ttk.Frame(self)
        bar.pack(fill="x", padx=8, pady=8)
        ttk.Label(bar, text="Action").pack(side="left")
        self.filter_cb = ttk.Combobox(bar, state="readonly", width=10, values=[ALL_ACTIONS, *LOG_ACTIONS])
        self.filter_cb.set(ALL_ACTIONS)
        self.filter_cb.pack(side="left", padx=6)
        self.filter_cb.bind("<<ComboboxSelected>>", lambda _e: self.on_filter())
        ttk.Button(bar, text="Export PDF", command=self.on_export).pack(side="right")
        ttk.Button(bar, text="Refresh", command=self.reload).pack(side="right", padx=6)

        cols = ("when", "user", "action", "entity", "details")
        self.tree = ttk.Treeview(self, columns=cols, show="headings")
        for c_, head, w in zip(cols, ("When", "User", "Action", "Entity", "Details"), (150, 130, 80, 120, 380)):
            self.tree.heading(c_, text=head)
            self.tree.column(c_, width=w, anchor="w")
        for action, color in (("CREATE", "#e7f7ec"), ("UPDATE", "#e8f0fe"), ("DELETE", "#fde8e8")):
            self.tree.tag_configure(action, background=color)
        self.tree.pack(fill="both", expand=True, padx=8, pady=(0, 8))

        self.reload()

    def reload(self):
        self.app.run_in_background(self.viewer.fetch, lambda _r: self.render())

    def render(self):
        if not self.winfo_exists():
            return
        for item in self.tree.get_children():
            self.tree.delete(item)
        for entry in self.viewer.visible_logs():
            entity = f"{entry.entity} #{entry.entity_id}" if entry.entity_id is not None else entry.entity
            self.tree.insert(
                "", "end",
                values=(entry.created_at, entry.user_name, entry.action, entity, entry.details),
                tags=(entry.action,),
            )

    def on_filter(self):
        self.viewer.set_filter(self.filter_cb.get())
        self.render()

    def on_export(self):
        target = filedialog.askdirectory(
            title="Save export to", initialdir=str(self.app.container.paths.exports_dir), parent=self,
        )
        if not target:
            return

        def done(result):
            if result is not None:
                self.app.toast(f"Exported {result.path.name}.", kind="success")

        self.app.run_in_background(lambda: self.viewer.export(target), done)
