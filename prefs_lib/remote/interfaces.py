from __future__ import annotations
from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class RemoteContents(Protocol):
    """Handle on a single URL-keyed entry of a persistence service."""

    url: str
    max_length: int

    def read(self) -> bytes: ...

    def write(self, data: bytes) -> None: ...


@runtime_checkable
class PersistenceService(Protocol):
    """URL-keyed persistence service.

    Implementations raise `FileNotFoundError` for missing entries,
    `FileExistsError` when creating an entry that is already present and
    `IOError` when a write exceeds the entry's maximum size. `get_names`
    may return None (or raise `NotImplementedError`) when enumeration is
    not supported.
    """

    def create(self, url: str, max_size: int) -> int: ...

    def get(self, url: str) -> RemoteContents: ...

    def delete(self, url: str) -> None: ...

    def get_names(self, url: str) -> Optional[List[str]]: ...


@runtime_checkable
class RemoteSession(Protocol):
    """Environment provided session exposing the codebase and its persistence service."""

    def codebase(self) -> str: ...

    def persistence(self) -> PersistenceService: ...
