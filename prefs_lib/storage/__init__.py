"""Storage abstraction package for the preferences store."""
from __future__ import annotations
from typing import Any

from .base import PREFS_DIR, PREFS_EXT, InitStatus, PathTriple, StorageBackend
from .file_backend import FileSystemBackend, delete_dir
from .remote_backend import RemoteServiceBackend
from .serializer import JSONSerializer, Serializer


def create_backend(backend: str = "file", **options: Any) -> StorageBackend:
    """Build a storage backend by name.

    - ``file``: accepts ``home`` and ``serializer``.
    - ``remote``: accepts ``session_provider``, ``serializer`` and ``max_size``.
    """
    if backend == "file":
        return FileSystemBackend(home=options.get("home"), serializer=options.get("serializer"))
    if backend == "remote":
        kwargs = {k: options[k] for k in ("session_provider", "serializer", "max_size") if options.get(k) is not None}
        return RemoteServiceBackend(**kwargs)
    raise ValueError(f"unknown storage backend: {backend!r}")


__all__ = [
    "PREFS_DIR",
    "PREFS_EXT",
    "FileSystemBackend",
    "InitStatus",
    "JSONSerializer",
    "PathTriple",
    "RemoteServiceBackend",
    "Serializer",
    "StorageBackend",
    "create_backend",
    "delete_dir",
]
