"""Dictionary-like preferences store.

A `PreferencesStore` keeps the preferences of one application in memory
and moves them to and from a storage backend one context at a time:

    store = create_store("com.example.App")
    store.put("theme", "dark")
    store.save("settings")      # ~/.pivot/com/example/App/settings.json

Nothing is persisted implicitly; callers save explicitly. Construction
never raises because of the storage medium: check `initialized` before
relying on persistence.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Iterator, List, Optional

from prefs_lib.errors import InvalidKeyError, SerializationError
from prefs_lib.storage import InitStatus, PathTriple, StorageBackend, create_backend

logger = logging.getLogger(__name__)

DEFAULT_APPLICATION_NAME = f"{__name__}.PreferencesStore"
DEFAULT_CONTEXT_NAME = "defaultPreferences"

_UNSET = object()


def is_valid_key(key: Optional[str]) -> bool:
    return isinstance(key, str) and len(key) > 0


def check_valid_key(key: Optional[str]) -> bool:
    """Raise `InvalidKeyError` unless `key` is a non-empty string."""
    if not is_valid_key(key):
        raise InvalidKeyError(key)
    return True


class PreferencesStore:
    """Preferences of one application, backed by a `StorageBackend`.

    Parameters
    - backend: storage backend owned by this store
    - application_name: groups all contexts of an application; empty or
      None falls back to `DEFAULT_APPLICATION_NAME`
    """

    def __init__(self, backend: StorageBackend, application_name: Optional[str] = None) -> None:
        self._backend = backend
        self._application_name = application_name or DEFAULT_APPLICATION_NAME
        self._prefs: Dict[str, Any] = {}
        self._context_name = DEFAULT_CONTEXT_NAME
        self._paths: PathTriple = backend.resolve_paths(self._application_name)
        self._init_status = backend.initialize(self._paths)
        if not self._init_status:
            logger.warning(
                "Preferences for %s not initialized (%s backend): %s",
                self._application_name, backend.kind, self._init_status.diagnostic,
            )

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def serializer(self) -> Any:
        return getattr(self._backend, "serializer", None)

    @property
    def initialized(self) -> bool:
        return self._init_status.ok

    @property
    def init_status(self) -> InitStatus:
        return self._init_status

    @property
    def application_name(self) -> str:
        return self._application_name

    @property
    def context_name(self) -> str:
        return self._context_name

    @context_name.setter
    def context_name(self, value: Optional[str]) -> None:
        self._context_name = value or DEFAULT_CONTEXT_NAME

    @property
    def root_path(self) -> str:
        return self._paths.root_path

    @property
    def base_path(self) -> str:
        return self._paths.base_path

    @property
    def base_name(self) -> str:
        return self._paths.base_name

    @property
    def preferences_path(self) -> str:
        return self._paths.preferences_path

    @property
    def context_resource_name(self) -> str:
        return self._paths.resource_name(self._context_name)

    def get(self, key: str) -> Any:
        check_valid_key(key)
        return self._prefs.get(key)

    def put(self, key: str, value: Any, default: Any = _UNSET) -> Any:
        """Store `value` under `key` and return the previous value.

        When `default` is given it replaces a None `value`; that form does
        not validate the key.
        """
        if default is _UNSET:
            check_valid_key(key)
        elif value is None:
            value = default
        previous = self._prefs.get(key)
        self._prefs[key] = value
        return previous

    def remove(self, key: str) -> Any:
        check_valid_key(key)
        return self._prefs.pop(key, None)

    def contains_key(self, key: str) -> bool:
        return key in self._prefs

    def is_empty(self) -> bool:
        return not self._prefs

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._prefs)

    def clear(self) -> None:
        """Drop all in-memory preferences and return to the default context."""
        self._prefs = {}
        self.context_name = None

    def __contains__(self, key: object) -> bool:
        return key in self._prefs

    def __len__(self) -> int:
        return len(self._prefs)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._prefs))

    def _select(self, context_name: Optional[str]) -> None:
        if context_name is not None:
            self.context_name = context_name

    def save(self, context_name: Optional[str] = None) -> bool:
        self._select(context_name)
        if self._prefs is None:
            raise SerializationError("preferences map is null.")
        self._backend.write(self._paths, self._context_name, self._prefs)
        logger.info("Saved preferences %s/%s", self._application_name, self._context_name)
        return True

    def load(self, context_name: Optional[str] = None) -> bool:
        self._select(context_name)
        prefs = self._backend.read(self._paths, self._context_name)
        self._prefs = prefs
        logger.debug("Loaded %d preferences from %s/%s", len(prefs), self._application_name, self._context_name)
        return True

    def exists(self, context_name: Optional[str] = None) -> bool:
        self._select(context_name)
        return self._backend.exists(self._paths, self._context_name)

    def delete(self, context_name: Optional[str] = None) -> bool:
        self._select(context_name)
        deleted = self._backend.delete(self._paths, self._context_name)
        if deleted:
            logger.info("Deleted preferences %s/%s", self._application_name, self._context_name)
        return deleted

    def dump(self, context_name: Optional[str] = None) -> str:
        self._select(context_name)
        return self._backend.dump(self._paths, self._context_name)

    def list_contexts(self) -> Optional[List[str]]:
        return self._backend.list_contexts(self._paths)

    def delete_preferences_path(self) -> bool:
        """Remove every context of this application from the backend."""
        return self._backend.delete_preferences_path(self._paths)

    def __repr__(self) -> str:
        return (
            f"PreferencesStore(application_name={self._application_name!r}, "
            f"context_name={self._context_name!r}, backend={self._backend!r}, "
            f"serializer={self.serializer!r}, preferences={self._prefs!r})"
        )


def create_store(application_name: Optional[str] = None, backend: str = "file", **options: Any) -> PreferencesStore:
    """Build a store over a backend created by `create_backend`."""
    return PreferencesStore(create_backend(backend, **options), application_name)
