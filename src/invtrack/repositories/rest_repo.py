from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import requests

from invtrack.config import ApiSettings
from invtrack.domain.errors import NetworkError, RequestError

log = logging.getLogger("invtrack.api")


class RestRepository:
    """HTTP transport for the inventory backend.

    Every call goes through `_request`, which attaches the bearer token
    (when the session has one) and turns failures into the app's error
    taxonomy. No retries.
    """

    def __init__(
        self,
        settings: ApiSettings,
        token_provider: Callable[[], Optional[str]] | None = None,
        session: requests.Session | None = None,
    ):
        self.settings = settings
        self.token_provider = token_provider or (lambda: None)
        self.http = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.settings.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _server_message(response: requests.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            msg = body.get("error")
            if msg:
                return str(msg)
        return None

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        started = time.monotonic()
        try:
            r = self.http.request(
                method,
                self._url(path),
                headers=self._headers(),
                timeout=self.settings.timeout_seconds,
                **kwargs,
            )
        except requests.RequestException as exc:
            log.warning("request_failed method=%s path=%s error=%s", method, path, exc)
            raise NetworkError("Could not reach the server. Check your connection.") from exc

        elapsed_ms = int((time.monotonic() - started) * 1000)
        log.info("request method=%s path=%s status=%s elapsed_ms=%s", method, path, r.status_code, elapsed_ms)

        if not 200 <= r.status_code < 300:
            server_msg = self._server_message(r)
            raise RequestError(
                server_msg or f"Request failed with status {r.status_code}.",
                status_code=r.status_code,
                server_message=server_msg,
            )
        return r

    @staticmethod
    def _json(r: requests.Response) -> Any:
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as exc:
            raise RequestError("Server returned an invalid response.", status_code=r.status_code) from exc

    def get(self, path: str, params: dict | None = None) -> Any:
        return self._json(self._request("GET", path, params=params))

    def post(self, path: str, json: dict | None = None, data: dict | None = None, files: dict | None = None) -> Any:
        return self._json(self._request("POST", path, json=json, data=data, files=files))

    def put(self, path: str, json: dict | None = None, data: dict | None = None, files: dict | None = None) -> Any:
        return self._json(self._request("PUT", path, json=json, data=data, files=files))

    def delete(self, path: str) -> Any:
        return self._json(self._request("DELETE", path))

    def get_bytes(self, path: str) -> bytes:
        return self._request("GET", path).content
