"""Exception types raised by the preferences store."""
from __future__ import annotations
from typing import Optional


class PreferencesError(Exception):
    """Base class for all preferences errors."""


class InvalidKeyError(PreferencesError, ValueError):
    """Raised when a key is empty or missing."""

    def __init__(self, key: Optional[str]) -> None:
        super().__init__(f'not a valid key "{key}"')
        self.key = key


class SerializationError(PreferencesError):
    """Wraps any I/O or encode/decode failure.

    The original exception is chained (``raise ... from exc``) and also
    kept on ``cause`` for callers that want to inspect it directly.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class ServiceUnavailableError(PreferencesError):
    """The remote persistence session is not available in this environment."""
