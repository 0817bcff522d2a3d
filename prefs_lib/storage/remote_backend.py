"""Storage backend proxying to a URL-keyed remote persistence service.

Resource URLs are flat: `<codebase>_pivot_<application>_<context>.json`.
The session is obtained lazily from `session_provider`; when the
environment provides none, initialization reports failure and every
persistence call raises `SerializationError`.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from prefs_lib.errors import SerializationError, ServiceUnavailableError
from prefs_lib.remote import DEFAULT_MAX_SIZE, PersistenceService, RemoteSession, get_session
from .base import PREFS_DIR, InitStatus, PathTriple, StorageBackend, strip_extension
from .serializer import JSONSerializer, Serializer

logger = logging.getLogger(__name__)

SEPARATOR = "_"


class RemoteServiceBackend(StorageBackend):
    kind = "remote"

    def __init__(
        self,
        session_provider: Callable[[], RemoteSession] | None = None,
        serializer: Serializer | None = None,
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> None:
        self.session_provider = session_provider or get_session
        self.serializer = serializer or JSONSerializer()
        self.max_size = max_size
        self._session: Optional[RemoteSession] = None
        self._persistence: Optional[PersistenceService] = None

    def _acquire_session(self) -> Optional[RemoteSession]:
        if self._session is None:
            try:
                self._session = self.session_provider()
            except ServiceUnavailableError as e:
                logger.warning("Remote session unavailable: %s", e)
                return None
            except Exception as e:
                logger.warning("Remote session lookup failed: %s", e, exc_info=True)
                return None
        return self._session

    def _codebase(self) -> str:
        session = self._acquire_session()
        if session is None:
            return ""
        try:
            return session.codebase()
        except Exception as e:
            logger.warning("Remote codebase unavailable: %s", e)
            return ""

    def _service(self) -> PersistenceService:
        if self._persistence is None:
            raise SerializationError("remote persistence service is not available")
        return self._persistence

    def resolve_paths(self, application_name: str) -> PathTriple:
        return PathTriple(
            root_path=self._codebase(),
            base_path=PREFS_DIR.replace(".", SEPARATOR) + SEPARATOR,
            base_name=application_name,
            separator=SEPARATOR,
        )

    def initialize(self, paths: PathTriple) -> InitStatus:
        session = self._acquire_session()
        if session is None:
            return InitStatus(False, "remote session unavailable")
        try:
            self._persistence = session.persistence()
        except Exception as e:
            logger.warning("Remote persistence service unavailable: %s", e)
            return InitStatus(False, str(e) or type(e).__name__)
        return InitStatus(True)

    def write(self, paths: PathTriple, context_name: str, prefs: Mapping[str, Any]) -> None:
        if prefs is None:
            raise SerializationError("preferences map is null.")
        url = paths.resource_name(context_name)
        service = self._service()
        try:
            data = self.serializer.dump(dict(prefs))
            # No atomic overwrite: drop any previous entry, then recreate it.
            try:
                service.delete(url)
            except FileNotFoundError:
                pass
            service.create(url, self.max_size)
            service.get(url).write(data)
        except Exception as e:
            logger.debug("Write of %s failed", url, exc_info=True)
            raise SerializationError(f"unable to write: {e}", e) from e

    def read(self, paths: PathTriple, context_name: str) -> Dict[str, Any]:
        url = paths.resource_name(context_name)
        service = self._service()
        try:
            data = self.serializer.load(service.get(url).read())
        except Exception as e:
            logger.debug("Read of %s failed", url, exc_info=True)
            raise SerializationError(f"unable to read: {e}", e) from e
        if not isinstance(data, dict):
            raise SerializationError(f"unable to read: {url} does not contain a JSON object")
        return data

    def exists(self, paths: PathTriple, context_name: str) -> bool:
        # Only checks that a handle can be acquired; an entry that was
        # created but never written still counts as existing.
        url = paths.resource_name(context_name)
        service = self._service()
        try:
            return service.get(url) is not None
        except FileNotFoundError:
            return False
        except Exception as e:
            raise SerializationError(f"unable to check for existence: {e}", e) from e

    def delete(self, paths: PathTriple, context_name: str) -> bool:
        url = paths.resource_name(context_name)
        service = self._service()
        try:
            service.delete(url)
        except FileNotFoundError:
            return False
        except Exception as e:
            raise SerializationError(f"unable to delete: {e}", e) from e
        return True

    def dump(self, paths: PathTriple, context_name: str) -> str:
        prefs = self.read(paths, context_name)
        try:
            return self.serializer.dump(prefs).decode("utf-8")
        except Exception as e:
            raise SerializationError(f"unable to dump: {e}", e) from e

    def list_contexts(self, paths: PathTriple) -> Optional[List[str]]:
        service = self._service()
        try:
            names = service.get_names(paths.preferences_path)
        except NotImplementedError:
            return None
        except Exception as e:
            raise SerializationError(f"unable to list: {e}", e) from e
        if names is None:
            return None
        return [strip_extension(name) for name in names]

    def __repr__(self) -> str:
        return f"RemoteServiceBackend(session={self._session!r}, persistence={self._persistence!r})"
