import pytest

from prefs_lib import remote
from prefs_lib.errors import SerializationError
from prefs_lib.preferences import PreferencesStore, create_store
from prefs_lib.remote import MemoryPersistenceService, MemorySession
from prefs_lib.storage import RemoteServiceBackend
from tests.helpers import UnavailableSession

CODEBASE = "http://host/persistence/"


@pytest.fixture
def session():
    return MemorySession(CODEBASE)


def make_store(session, name="com.example.App", **kw):
    return create_store(name, backend="remote", session_provider=lambda: session, **kw)


def test_save_load_roundtrip_through_fresh_store(session):
    store = make_store(session)
    assert store.initialized is True
    store.put("theme", "dark")
    store.put("sizes", [1, 2])
    store.save("settings")

    fresh = make_store(session)
    fresh.load("settings")
    assert fresh.as_dict() == {"theme": "dark", "sizes": [1, 2]}


def test_resource_url_is_flat(session):
    store = make_store(session)
    store.save("settings")
    assert store.context_resource_name == CODEBASE + "_pivot_com.example.App_settings.json"
    assert session.persistence().get(store.context_resource_name).read()


def test_write_replaces_existing_entry(session):
    store = make_store(session)
    store.put("a", 1)
    store.save("ctx")
    store.clear()
    store.put("b", 2)
    store.save("ctx")
    fresh = make_store(session)
    fresh.load("ctx")
    assert fresh.as_dict() == {"b": 2}


def test_write_larger_than_max_size_fails(session):
    store = make_store(session, max_size=8)
    store.put("long", "x" * 100)
    with pytest.raises(SerializationError) as exc:
        store.save("ctx")
    assert isinstance(exc.value.cause, IOError)


def test_load_missing_raises(session):
    store = make_store(session)
    store.put("a", 1)
    with pytest.raises(SerializationError):
        store.load("missing")
    assert store.as_dict() == {"a": 1}


def test_exists_only_requires_a_handle(session):
    store = make_store(session)
    assert store.exists("ctx") is False
    # An entry created but never written still reports as existing.
    session.persistence().create(store.context_resource_name, 10)
    assert store.exists("ctx") is True
    with pytest.raises(SerializationError):
        store.load("ctx")


def test_delete(session):
    store = make_store(session)
    assert store.delete("ctx") is False
    store.save("ctx")
    assert store.delete("ctx") is True
    assert store.exists("ctx") is False


def test_dump_reserializes(session):
    store = make_store(session)
    store.put("a", 1)
    store.save("ctx")
    text = store.dump("ctx")
    assert text == store.serializer.dump({"a": 1}).decode("utf-8")


def test_list_contexts(session):
    store = make_store(session)
    assert store.list_contexts() == []
    store.save("one")
    store.save("two")
    make_store(session, name="other").save("three")
    assert sorted(store.list_contexts()) == ["one", "two"]


class NoListingService(MemoryPersistenceService):
    def get_names(self, url):
        raise NotImplementedError


class NullListingService(MemoryPersistenceService):
    def get_names(self, url):
        return None


@pytest.mark.parametrize("service_cls", [NoListingService, NullListingService])
def test_list_contexts_unsupported_returns_none(service_cls):
    session = MemorySession(CODEBASE, service_cls())
    assert make_store(session).list_contexts() is None


class BrokenService(MemoryPersistenceService):
    def get(self, url):
        raise ConnectionError("down")

    def delete(self, url):
        raise ConnectionError("down")


def test_service_failures_are_wrapped():
    session = MemorySession(CODEBASE, BrokenService())
    store = make_store(session)
    with pytest.raises(SerializationError):
        store.exists("ctx")
    with pytest.raises(SerializationError):
        store.delete("ctx")
    with pytest.raises(SerializationError):
        store.save("ctx")


def test_unavailable_session_fails_initialization_gracefully():
    store = PreferencesStore(RemoteServiceBackend(session_provider=UnavailableSession()), "app")
    assert store.initialized is False
    assert store.root_path == ""
    store.put("a", 1)
    assert store.get("a") == 1
    with pytest.raises(SerializationError):
        store.save("ctx")
    with pytest.raises(SerializationError):
        store.list_contexts()


def test_default_provider_uses_environment_session(session):
    assert create_store("app", backend="remote").initialized is False
    remote.set_session(session)
    store = create_store("app", backend="remote")
    assert store.initialized is True
    assert store.root_path == CODEBASE


def test_delete_preferences_path_is_unsupported(session):
    assert make_store(session).delete_preferences_path() is False


def test_failing_session_provider_does_not_escape_construction():
    def provider():
        raise RuntimeError("no launcher service")

    store = PreferencesStore(RemoteServiceBackend(session_provider=provider), "app")
    assert store.initialized is False
    assert store.root_path == ""
    store.put("a", 1)
    with pytest.raises(SerializationError):
        store.save("ctx")


class BrokenPersistenceSession(MemorySession):
    def persistence(self):
        raise RuntimeError("persistence lookup failed")


def test_failing_persistence_lookup_fails_initialization_gracefully():
    session = BrokenPersistenceSession(CODEBASE)
    store = PreferencesStore(RemoteServiceBackend(session_provider=lambda: session), "app")
    assert store.initialized is False
    assert store.init_status.diagnostic == "persistence lookup failed"
    assert store.root_path == CODEBASE


def test_malformed_environment_timeout_fails_initialization_gracefully(monkeypatch):
    monkeypatch.setenv("PREFS_REMOTE_CODEBASE", "http://host/persistence")
    monkeypatch.setenv("PREFS_REMOTE_TIMEOUT", "soon")
    store = PreferencesStore(RemoteServiceBackend(), "app")
    assert store.initialized is False
    assert store.root_path == ""
