"""Application factory for the preferences HTTP server.

`create_app(config)` composes the persistence service and the preferences
store factory, registers them in a `ServiceContainer` exposed on
`app.state.container` and mounts the routers. Nothing happens at import
time so tests can construct isolated apps:

    from prefs_lib.server import create_app
    from prefs_lib.config import Config
    app = create_app(Config(home_dir="/tmp/prefs"))
"""
from __future__ import annotations
from typing import Callable, Optional

from fastapi import FastAPI

from prefs_lib.config import Config
from prefs_lib.preferences import PreferencesStore
from prefs_lib.remote import MemoryPersistenceService, PersistenceService
from prefs_lib.services import ServiceContainer
from prefs_lib.storage import create_backend

import logging
logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Config] = None,
    persistence_service: Optional[PersistenceService] = None,
    preferences_factory: Optional[Callable[[str], PreferencesStore]] = None,
) -> FastAPI:
    """Create and return a configured FastAPI application."""
    config = config or Config()

    if preferences_factory is None:
        def preferences_factory(application_name: str) -> PreferencesStore:
            return PreferencesStore(create_backend(config.backend, **config.backend_options()), application_name)

    container = ServiceContainer()
    container.register_singleton("config", config)
    if persistence_service is None:
        # Built on the first persistence request only.
        container.register_factory("persistence_service", MemoryPersistenceService)
    else:
        container.register_singleton("persistence_service", persistence_service)
    container.register_singleton("preferences_factory", preferences_factory)

    app = FastAPI(title="Preferences Server")
    app.state.container = container

    # Router registration: import routers here to avoid import-time side-effects
    from prefs_lib.server.api import router as server_router
    from prefs_lib.server.persistence_api import router as persistence_router
    from prefs_lib.server.preferences_api import router as preferences_router

    app.include_router(server_router)
    app.include_router(persistence_router)
    app.include_router(preferences_router, prefix='/api')

    logger.info("Preferences server configured with %s backend", config.backend)
    return app
