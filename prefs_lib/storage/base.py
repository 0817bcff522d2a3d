"""Storage backend interface definitions.

Defines the StorageBackend abstract class used by the preferences store to
resolve where a context lives and to move its mapping to and from that
location. Implementations translate the path triple into whatever the
medium uses (a file path, a remote URL).
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

PREFS_DIR = ".pivot"
PREFS_EXT = ".json"


@dataclass(frozen=True)
class PathTriple:
    """Backend specific location of an application's preferences area."""

    root_path: str
    base_path: str
    base_name: str
    separator: str

    @property
    def preferences_path(self) -> str:
        return self.root_path + self.base_path + self.base_name + self.separator

    def resource_name(self, context_name: str) -> str:
        return self.preferences_path + context_name + PREFS_EXT


@dataclass(frozen=True)
class InitStatus:
    """Outcome of a backend initialization hook."""

    ok: bool
    diagnostic: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


def strip_extension(name: str) -> str:
    idx = name.rfind(".")
    return name[:idx] if idx >= 0 else name


class StorageBackend(ABC):
    """Abstract storage backend.

    A backend instance belongs to exactly one store. It is not
    thread-safe and performs blocking I/O.
    """

    #: Short name used by the factory and in log messages.
    kind: str = ""

    @abstractmethod
    def resolve_paths(self, application_name: str) -> PathTriple:
        """Return the path triple for `application_name`."""

    @abstractmethod
    def initialize(self, paths: PathTriple) -> InitStatus:
        """Prepare the backend for persistence operations.

        Must not raise: failures are logged and reported through the
        returned status.
        """

    @abstractmethod
    def write(self, paths: PathTriple, context_name: str, prefs: Mapping[str, Any]) -> None:
        """Persist `prefs` as the resource of `context_name`.

        Raises `SerializationError` on any failure.
        """

    @abstractmethod
    def read(self, paths: PathTriple, context_name: str) -> Dict[str, Any]:
        """Return a fresh mapping read from the resource of `context_name`.

        Raises `SerializationError` on any failure, including absence.
        """

    @abstractmethod
    def exists(self, paths: PathTriple, context_name: str) -> bool:
        """Return True if the resource of `context_name` is present."""

    @abstractmethod
    def delete(self, paths: PathTriple, context_name: str) -> bool:
        """Remove the resource; return False when absent or not writable."""

    @abstractmethod
    def dump(self, paths: PathTriple, context_name: str) -> str:
        """Return the textual content of the resource."""

    @abstractmethod
    def list_contexts(self, paths: PathTriple) -> Optional[List[str]]:
        """Return context names available, or None when listing is not possible."""

    def delete_preferences_path(self, paths: PathTriple) -> bool:
        """Remove the whole preferences area. Not supported by default."""
        return False
