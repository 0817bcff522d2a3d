"""HTTP client for the persistence service exposed by `prefs_lib.server`.

Entry URLs are absolute (`<codebase><name>`); the codebase itself is the
collection URL used for listing.
"""
from __future__ import annotations
import logging
from typing import Any, List, Optional

import requests

from .memory import DEFAULT_MAX_SIZE

logger = logging.getLogger(__name__)

MAX_SIZE_HEADER = "X-Max-Size"


def _check(resp: Any, url: str) -> Any:
    if resp.status_code == 404:
        raise FileNotFoundError(url)
    if resp.status_code == 409:
        raise FileExistsError(url)
    if resp.status_code == 413:
        raise IOError(f"content too large for {url}")
    if resp.status_code >= 400:
        raise IOError(f"HTTP {resp.status_code} for {url}")
    return resp


class HttpContents:
    def __init__(self, service: "HttpPersistenceService", url: str, max_length: int) -> None:
        self._service = service
        self.url = url
        self.max_length = max_length

    def read(self) -> bytes:
        resp = _check(self._service.http.get(self.url, timeout=self._service.timeout), self.url)
        return resp.content

    def write(self, data: bytes) -> None:
        _check(self._service.http.post(self.url, data=bytes(data), timeout=self._service.timeout), self.url)

    def __repr__(self) -> str:
        return f"HttpContents(url={self.url!r})"


class HttpPersistenceService:
    """Persistence service client.

    Parameters
    - base_url: collection URL of the service, e.g. ``http://host/persistence/``
    - http: object with requests-style ``get/put/post/delete`` methods;
      defaults to a new ``requests.Session``.
    - timeout: per request timeout in seconds.
    """

    def __init__(self, base_url: str, http: Any = None, timeout: float = 10.0) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    def create(self, url: str, max_size: int = DEFAULT_MAX_SIZE) -> int:
        resp = _check(self.http.put(url, params={"max_size": max_size}, timeout=self.timeout), url)
        return int(resp.json().get("max_size", max_size))

    def get(self, url: str) -> HttpContents:
        resp = _check(self.http.get(url, timeout=self.timeout), url)
        max_length = int(resp.headers.get(MAX_SIZE_HEADER, DEFAULT_MAX_SIZE))
        return HttpContents(self, url, max_length)

    def delete(self, url: str) -> None:
        _check(self.http.delete(url, timeout=self.timeout), url)

    def get_names(self, url: str) -> Optional[List[str]]:
        if not url.startswith(self.base_url):
            logger.debug("Cannot list %s outside of %s", url, self.base_url)
            return None
        prefix = url[len(self.base_url):]
        resp = self.http.get(self.base_url.rstrip("/"), params={"prefix": prefix}, timeout=self.timeout)
        if resp.status_code in (404, 405, 501):
            return None
        names = _check(resp, url).json()
        return list(names) if names is not None else None


class HttpSession:
    def __init__(self, codebase: str, http: Any = None, timeout: float = 10.0) -> None:
        self._codebase = codebase if codebase.endswith("/") else codebase + "/"
        self._http = http
        self._timeout = timeout
        self._service: Optional[HttpPersistenceService] = None

    def codebase(self) -> str:
        return self._codebase

    def persistence(self) -> HttpPersistenceService:
        if self._service is None:
            self._service = HttpPersistenceService(self._codebase, self._http, self._timeout)
        return self._service
