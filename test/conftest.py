import sys
import threading
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


class FakeRepo:
    """Canned backend keyed by (METHOD, path).

    A route value may be a payload, an exception instance (raised) or a
    callable taking the call kwargs.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, str, dict]] = []
        self._lock = threading.Lock()

    def _call(self, method: str, path: str, **kwargs):
        with self._lock:
            self.calls.append((method, path, kwargs))
            route = self.routes.get((method, path))
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(**kwargs)
        return route

    def get(self, path, params=None):
        return self._call("GET", path, params=params)

    def post(self, path, json=None, data=None, files=None):
        return self._call("POST", path, json=json, data=data, files=files)

    def put(self, path, json=None, data=None, files=None):
        return self._call("PUT", path, json=json, data=data, files=files)

    def delete(self, path):
        return self._call("DELETE", path)

    def get_bytes(self, path):
        return self._call("GET", path)

    def calls_to(self, method: str, path: str) -> list[dict]:
        return [kw for m, p, kw in self.calls if m == method and p == path]


class RecordingPrompter:
    def __init__(self, confirm_answer: bool = True):
        self.confirm_answer = confirm_answer
        self.alerts: list[tuple[str, str]] = []
        self.infos: list[tuple[str, str]] = []
        self.confirms: list[tuple[str, str]] = []

    def alert(self, title, message):
        self.alerts.append((title, message))

    def info(self, title, message):
        self.infos.append((title, message))

    def confirm(self, title, message):
        self.confirms.append((title, message))
        return self.confirm_answer


class MemoryFileStore:
    def __init__(self, data: dict | None = None):
        self.data = data
        self.saved: list[dict] = []

    def load(self):
        return self.data

    def save(self, token, user):
        self.data = {"token": token, "user": user}
        self.saved.append(self.data)

    def clear(self):
        self.data = None


def make_session(repo, role: str = "admin", user_id: int = 1, email: str = "boss@example.com", name: str = "Boss"):
    from invtrack.services.auth_service import SessionStore

    store = MemoryFileStore(
        {"token": "tok-1", "user": {"id": user_id, "name": name, "email": email, "role": role}}
    )
    return SessionStore(repo, store)


@pytest.fixture
def prompter():
    return RecordingPrompter()
