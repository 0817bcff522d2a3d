"""Remote persistence boundary.

Exposes the session protocols, the in-memory and HTTP implementations and
a `get_session` lookup that returns the session provided by the
environment. The lookup raises `ServiceUnavailableError` when no session
is configured, which callers treat as "remote persistence not available".
"""
from __future__ import annotations
from typing import Optional
import os

import logging

from prefs_lib.errors import ServiceUnavailableError
from .interfaces import PersistenceService, RemoteContents, RemoteSession
from .memory import DEFAULT_MAX_SIZE, MemoryPersistenceService, MemorySession
from .http_client import HttpPersistenceService, HttpSession

logger = logging.getLogger(__name__)

CODEBASE_ENV = "PREFS_REMOTE_CODEBASE"
TIMEOUT_ENV = "PREFS_REMOTE_TIMEOUT"

# Module-level session singleton
_session_instance: Optional[RemoteSession] = None


def get_session() -> RemoteSession:
    """Return the environment provided remote session.

    The codebase URL is read from `PREFS_REMOTE_CODEBASE` and the request
    timeout from `PREFS_REMOTE_TIMEOUT`. The session is created once and
    reused.
    """
    global _session_instance
    if _session_instance is not None:
        return _session_instance

    codebase = os.environ.get(CODEBASE_ENV)
    if not codebase:
        raise ServiceUnavailableError(f"remote persistence not available: {CODEBASE_ENV} is not set")
    raw_timeout = os.environ.get(TIMEOUT_ENV, "10")
    try:
        timeout = float(raw_timeout)
    except ValueError as e:
        raise ServiceUnavailableError(f"remote persistence not available: invalid {TIMEOUT_ENV} {raw_timeout!r}") from e
    logger.info("Using remote persistence service at %s", codebase)
    _session_instance = HttpSession(codebase, timeout=timeout)
    return _session_instance


def set_session(session: Optional[RemoteSession]) -> None:
    """Install `session` as the environment session (None clears it)."""
    global _session_instance
    _session_instance = session


def reset_session() -> None:
    set_session(None)


__all__ = [
    "DEFAULT_MAX_SIZE",
    "HttpPersistenceService",
    "HttpSession",
    "MemoryPersistenceService",
    "MemorySession",
    "PersistenceService",
    "RemoteContents",
    "RemoteSession",
    "get_session",
    "reset_session",
    "set_session",
]
