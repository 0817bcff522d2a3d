"""In-process persistence service.

Entries live in a dict keyed by URL. Used by the development server and as
the default service in tests.
"""
from __future__ import annotations
from threading import RLock
from typing import Dict, List, Optional

DEFAULT_MAX_SIZE = 4096


class MemoryContents:
    def __init__(self, service: "MemoryPersistenceService", url: str) -> None:
        self._service = service
        self.url = url

    @property
    def max_length(self) -> int:
        return self._service._entry(self.url)[1]

    def read(self) -> bytes:
        return self._service._entry(self.url)[0]

    def write(self, data: bytes) -> None:
        self._service._write(self.url, bytes(data))

    def __repr__(self) -> str:
        return f"MemoryContents(url={self.url!r})"


class MemoryPersistenceService:
    def __init__(self) -> None:
        self._lock = RLock()
        # url -> (content, max_size)
        self._entries: Dict[str, tuple[bytes, int]] = {}

    def _entry(self, url: str) -> tuple[bytes, int]:
        with self._lock:
            try:
                return self._entries[url]
            except KeyError:
                raise FileNotFoundError(url)

    def _write(self, url: str, data: bytes) -> None:
        with self._lock:
            _, max_size = self._entry(url)
            if len(data) > max_size:
                raise IOError(f"{len(data)} bytes exceed the maximum size of {max_size} for {url}")
            self._entries[url] = (data, max_size)

    def create(self, url: str, max_size: int = DEFAULT_MAX_SIZE) -> int:
        with self._lock:
            if url in self._entries:
                raise FileExistsError(url)
            self._entries[url] = (b"", max_size)
            return max_size

    def get(self, url: str) -> MemoryContents:
        self._entry(url)
        return MemoryContents(self, url)

    def delete(self, url: str) -> None:
        with self._lock:
            if url not in self._entries:
                raise FileNotFoundError(url)
            del self._entries[url]

    def get_names(self, url: str) -> Optional[List[str]]:
        with self._lock:
            return sorted(u[len(url):] for u in self._entries if u.startswith(url) and u != url)


class MemorySession:
    """Session over a `MemoryPersistenceService` rooted at `codebase`."""

    def __init__(self, codebase: str = "memory://prefs/", service: MemoryPersistenceService | None = None) -> None:
        self._codebase = codebase
        self._service = service or MemoryPersistenceService()

    def codebase(self) -> str:
        return self._codebase

    def persistence(self) -> MemoryPersistenceService:
        return self._service
