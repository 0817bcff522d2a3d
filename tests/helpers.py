import os
from pathlib import Path
from typing import Any, Optional

from starlette.testclient import TestClient


def expected_root(home: Path) -> str:
    """Root path the file backend derives from `home`."""
    return str(home).replace(".", os.sep) + os.sep


class ClientAdapter:
    """Expose a Starlette TestClient with the requests call signatures
    used by `HttpPersistenceService`."""

    def __init__(self, client: TestClient) -> None:
        self.client = client
        self.calls: list[tuple[str, str]] = []

    def get(self, url: str, params: Optional[dict] = None, timeout: Any = None):
        self.calls.append(('GET', url))
        return self.client.get(url, params=params)

    def put(self, url: str, params: Optional[dict] = None, timeout: Any = None):
        self.calls.append(('PUT', url))
        return self.client.put(url, params=params)

    def post(self, url: str, data: bytes = b'', timeout: Any = None):
        self.calls.append(('POST', url))
        return self.client.post(url, content=data)

    def delete(self, url: str, timeout: Any = None):
        self.calls.append(('DELETE', url))
        return self.client.delete(url)


class UnavailableSession:
    """Session provider stand-in that mimics a missing environment service."""

    def __call__(self):
        from prefs_lib.errors import ServiceUnavailableError
        raise ServiceUnavailableError('no session in this environment')
