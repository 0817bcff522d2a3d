import pytest

from prefs_lib import remote
from prefs_lib.errors import ServiceUnavailableError
from prefs_lib.remote import HttpSession, MemorySession


def test_get_session_without_environment_raises():
    with pytest.raises(ServiceUnavailableError):
        remote.get_session()


def test_get_session_from_environment_is_cached(monkeypatch):
    monkeypatch.setenv("PREFS_REMOTE_CODEBASE", "http://host/persistence")
    s1 = remote.get_session()
    s2 = remote.get_session()
    assert s1 is s2
    assert isinstance(s1, HttpSession)
    assert s1.codebase() == "http://host/persistence/"


def test_set_session_overrides_lookup():
    session = MemorySession()
    remote.set_session(session)
    assert remote.get_session() is session
    remote.reset_session()
    with pytest.raises(ServiceUnavailableError):
        remote.get_session()


def test_get_session_with_malformed_timeout_raises(monkeypatch):
    monkeypatch.setenv("PREFS_REMOTE_CODEBASE", "http://host/persistence")
    monkeypatch.setenv("PREFS_REMOTE_TIMEOUT", "soon")
    with pytest.raises(ServiceUnavailableError) as exc:
        remote.get_session()
    assert "PREFS_REMOTE_TIMEOUT" in str(exc.value)
    assert isinstance(exc.value.__cause__, ValueError)
