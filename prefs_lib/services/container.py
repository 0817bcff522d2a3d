"""Service registry shared by the HTTP routers.

`create_app` registers the configuration, the persistence service and the
preferences store factory here; routers look them up per request through
`resolve_service`.
"""
from typing import Any, Callable, Dict, Iterator


class ServiceContainer:
    """Named services, either ready instances or lazily built ones.

    A factory runs on first lookup only; its result replaces the
    registration so later lookups return the same instance.
    """

    def __init__(self) -> None:
        self._instances: Dict[str, Any] = {}
        self._pending: Dict[str, Callable[[], Any]] = {}

    def register_singleton(self, key: str, instance: Any) -> None:
        self._pending.pop(key, None)
        self._instances[key] = instance

    def register_factory(self, key: str, factory: Callable[[], Any]) -> None:
        self._instances.pop(key, None)
        self._pending[key] = factory

    def get(self, key: str) -> Any:
        try:
            return self._instances[key]
        except KeyError:
            pass
        factory = self._pending.pop(key, None)
        if factory is None:
            raise KeyError(f"No service registered for key '{key}'")
        instance = self._instances[key] = factory()
        return instance

    def __contains__(self, key: object) -> bool:
        return key in self._instances or key in self._pending

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(set(self._instances) | set(self._pending)))
