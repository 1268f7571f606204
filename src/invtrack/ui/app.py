from __future__ import annotations

import logging
import queue
import threading
import tkinter as tk
from tkinter import ttk, messagebox

from invtrack.application.container import AppContainer
from invtrack.application.dashboard import DashboardController
from invtrack.domain.errors import error_message
from invtrack.ui.views.login_view import LoginView
from invtrack.ui.views.products_view import ProductsView

log = logging.getLogger(__name__)


class TkPrompter:
    """messagebox-backed prompts; calls from worker threads wait for the Tk thread."""

    def __init__(self, app: "App"):
        self.app = app

    def _on_ui_thread(self, fn):
        if threading.current_thread() is threading.main_thread():
            return fn()
        done = threading.Event()
        box = {}

        def run():
            try:
                box["value"] = fn()
            finally:
                done.set()

        self.app.post(run)
        done.wait()
        return box.get("value")

    def alert(self, title: str, message: str) -> None:
        self._on_ui_thread(lambda: messagebox.showerror(title, message, parent=self.app))

    def info(self, title: str, message: str) -> None:
        self._on_ui_thread(lambda: messagebox.showinfo(title, message, parent=self.app))

    def confirm(self, title: str, message: str) -> bool:
        return bool(self._on_ui_thread(lambda: messagebox.askyesno(title, message, parent=self.app)))


class App(tk.Tk):
    def __init__(self, container: AppContainer):
        super().__init__()
        self.title("Inventory Tracker")
        self.geometry("1280x720")
        self.minsize(1040, 600)

        self.container = container
        self.session = container.session
        self.prompter = TkPrompter(self)
        self.dashboard: DashboardController | None = None

        # worker threads post callables here; drained on the Tk thread
        self._ui_queue: queue.Queue = queue.Queue()
        self.status_var = tk.StringVar(value="")
        self._toast_after_id = None

        self._build_styles()
        self.body = ttk.Frame(self)
        self.body.pack(fill="both", expand=True)
        self._build_status_bar()

        self.protocol("WM_DELETE_WINDOW", self.on_close)
        self.after(100, self._drain_ui_queue)

        if self.session.is_authenticated():
            self.show_dashboard()
        else:
            self.show_login()

    def _build_styles(self):
        style = ttk.Style(self)
        try:
            style.configure("Big.TButton", padding=(14, 10))
            style.configure("Title.TLabel", font=("Segoe UI", 12, "bold"))
            style.configure("KPI.TLabel", font=("Segoe UI", 10))
            style.configure("KPIValue.TLabel", font=("Segoe UI", 11, "bold"))
        except tk.TclError as e:
            log.exception("UI style setup failed: %s", e)

    def _build_status_bar(self):
        bar = ttk.Frame(self)
        bar.pack(fill="x", padx=12, pady=(0, 10))
        ttk.Label(bar, textvariable=self.status_var).pack(side="left")
        ttk.Label(bar, text=f"API: {self.container.settings.base_url}").pack(side="right")

    def _clear_body(self):
        for child in self.body.winfo_children():
            child.destroy()

    def toast(self, msg: str, kind: str = "info", ms: int = 2500):
        prefix = {"info": "ℹ ", "success": "✅ ", "warn": "⚠ ", "error": "❌ "}.get(kind, "")
        self.status_var.set(prefix + msg)
        if self._toast_after_id is not None:
            self.after_cancel(self._toast_after_id)
        self._toast_after_id = self.after(ms, lambda: self.status_var.set(""))

    def handle_error(self, title: str, err: Exception, toast_text: str):
        log.warning("%s: %s", title, err)
        self.prompter.alert(title, error_message(err, toast_text))
        self.toast(toast_text, kind="error")

    def can_action(self, action: str) -> bool:
        return self.session.can(action)

    # ---------- threading ----------
    def post(self, callback):
        self._ui_queue.put(callback)

    def run_in_background(self, work, done=None):
        def target():
            try:
                result = work()
            except Exception:
                log.exception("background task failed")
                return
            if done is not None:
                self._ui_queue.put(lambda: done(result))

        threading.Thread(target=target, daemon=True).start()

    def _drain_ui_queue(self):
        while True:
            try:
                callback = self._ui_queue.get_nowait()
            except queue.Empty:
                break
            callback()
        self.after(100, self._drain_ui_queue)

    # ---------- screens ----------
    def show_login(self):
        self._close_dashboard()
        self._clear_body()
        LoginView(self.body, self).frame.pack(fill="both", expand=True)

    def show_dashboard(self):
        self._clear_body()
        c = self.container
        self.dashboard = DashboardController(
            c.products, c.suppliers, self.session, self.prompter, page_size=c.settings.page_size,
        )
        view = ProductsView(self.body, self, self.dashboard)
        view.frame.pack(fill="both", expand=True, padx=12, pady=8)
        self.refresh_dashboard(show_toast=False)

    def refresh_dashboard(self, show_toast: bool = True):
        if self.dashboard is None:
            return
        self.toast("Loading...", ms=10_000)

        def done(ok: bool):
            if ok:
                if show_toast:
                    self.toast("Refreshed.", kind="info", ms=1200)
                else:
                    self.status_var.set("")
            elif self.dashboard is not None and self.dashboard.last_error:
                self.toast("Could not load data from the server.", kind="error")

        self.run_in_background(self.dashboard.refresh, done)

    def logout(self):
        self.session.logout()
        self.toast("Signed out.", kind="info")
        self.show_login()

    def _close_dashboard(self):
        if self.dashboard is not None:
            self.dashboard.close()
            self.dashboard = None

    def on_close(self):
        self._close_dashboard()
        self.destroy()
