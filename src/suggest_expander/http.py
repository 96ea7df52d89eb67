from __future__ import annotations

import threading
from typing import Any, Dict, Optional

import requests

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/124.0 Safari/537.36"
    ),
    "Accept-Language": "es-419,es;q=0.9,en-US;q=0.8,en;q=0.7",
}


class HttpClient:
    """Thin wrapper over ``requests`` with a timeout on every call.

    Sessions are kept per thread so the client can be shared by a worker pool.
    Every call is a single attempt; failures propagate to the caller.
    """

    def __init__(
        self,
        timeout: float = 8.0,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.timeout = timeout
        self.headers = dict(DEFAULT_HEADERS)
        if headers:
            self.headers.update(headers)
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
        return session

    def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        r = self.session.get(url, params=params, timeout=self.timeout)
        r.raise_for_status()
        return r

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.get(url, params=params).json()

    def get_bytes(self, url: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        return self.get(url, params=params).content
