"""File-backed storage backend for preferences.

Contexts are stored as JSON files under
`<home>/.pivot/<application/name/as/dirs>/<context>.json`. Writes go to a
temporary sibling first and are then renamed over the resource.
"""
from __future__ import annotations
import contextlib
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from prefs_lib.errors import SerializationError
from .base import PREFS_DIR, PREFS_EXT, InitStatus, PathTriple, StorageBackend, strip_extension
from .serializer import JSONSerializer, Serializer

logger = logging.getLogger(__name__)


def delete_dir(path: str | Path) -> bool:
    """Recursively delete `path`, children first.

    Returns False as soon as a child cannot be removed; remaining siblings
    at that level are left in place.
    """
    p = Path(path)
    if p.is_dir() and not p.is_symlink():
        for child in p.iterdir():
            if not delete_dir(child):
                return False
        try:
            p.rmdir()
        except OSError as e:
            logger.debug("Unable to remove directory %s: %s", p, e)
            return False
        return True
    try:
        p.unlink()
    except OSError as e:
        logger.debug("Unable to remove %s: %s", p, e)
        return False
    return True


class FileSystemBackend(StorageBackend):
    kind = "file"

    def __init__(self, home: str | Path | None = None, serializer: Serializer | None = None) -> None:
        self.home = str(home) if home is not None else str(Path.home())
        self.serializer = serializer or JSONSerializer()

    @property
    def separator(self) -> str:
        return os.sep

    def resolve_paths(self, application_name: str) -> PathTriple:
        # Dots in the home directory become separators, so "/home/john.doe"
        # maps to "/home/john/doe/". Kept for compatibility with existing
        # preference trees.
        root = self.home.replace(".", self.separator) + self.separator
        return PathTriple(
            root_path=root,
            base_path=PREFS_DIR + self.separator,
            base_name=application_name.replace(".", "/"),
            separator=self.separator,
        )

    def initialize(self, paths: PathTriple) -> InitStatus:
        try:
            Path(paths.preferences_path).mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as e:
            logger.warning("Unable to create preferences path %s: %s", paths.preferences_path, e)
            return InitStatus(False, str(e))
        return InitStatus(True)

    def write(self, paths: PathTriple, context_name: str, prefs: Mapping[str, Any]) -> None:
        if prefs is None:
            raise SerializationError("preferences map is null.")
        path = Path(paths.resource_name(context_name))
        tmp = path.with_name(path.name + ".tmp")
        try:
            data = self.serializer.dump(dict(prefs))
            with open(tmp, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(path)
        except Exception as e:
            logger.debug("Write of %s failed", path, exc_info=True)
            with contextlib.suppress(OSError, ValueError):
                tmp.unlink(missing_ok=True)
            raise SerializationError(f"unable to write: {e}", e) from e
        logger.debug("Saved preferences to %s", path)

    def read(self, paths: PathTriple, context_name: str) -> Dict[str, Any]:
        path = Path(paths.resource_name(context_name))
        try:
            with open(path, "rb") as f:
                data = self.serializer.load(f.read())
        except Exception as e:
            logger.debug("Read of %s failed", path, exc_info=True)
            raise SerializationError(f"unable to read: {e}", e) from e
        if not isinstance(data, dict):
            raise SerializationError(f"unable to read: {path} does not contain a JSON object")
        return data

    def exists(self, paths: PathTriple, context_name: str) -> bool:
        path = paths.resource_name(context_name)
        return os.path.isfile(path) and os.access(path, os.R_OK)

    def delete(self, paths: PathTriple, context_name: str) -> bool:
        path = paths.resource_name(context_name)
        if not (os.path.isfile(path) and os.access(path, os.W_OK)):
            return False
        try:
            os.remove(path)
        except OSError as e:
            raise SerializationError(f"unable to delete: {e}", e) from e
        return True

    def dump(self, paths: PathTriple, context_name: str) -> str:
        # Raw file content, line terminators dropped; not parsed.
        path = paths.resource_name(context_name)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return "".join(line.rstrip("\r\n") for line in f)
        except (OSError, ValueError) as e:
            raise SerializationError(f"unable to dump: {e}", e) from e

    def list_contexts(self, paths: PathTriple) -> Optional[List[str]]:
        prefs_dir = Path(paths.preferences_path)
        if not prefs_dir.is_dir():
            return None
        return sorted(
            strip_extension(p.name)
            for p in prefs_dir.iterdir()
            if p.is_file() and p.name.endswith(PREFS_EXT)
        )

    def delete_preferences_path(self, paths: PathTriple) -> bool:
        return delete_dir(paths.preferences_path)

    def __repr__(self) -> str:
        return f"FileSystemBackend(home={self.home!r})"
