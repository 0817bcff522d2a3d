from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from prefs_lib.services import ServiceContainer, resolve_service


def make_request(container):
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(container=container)))


def test_singletons_and_factories():
    c = ServiceContainer()
    c.register_singleton('a', 1)
    calls = []
    c.register_factory('b', lambda: calls.append(1) or object())
    assert c.get('a') == 1
    first = c.get('b')
    assert c.get('b') is first
    assert calls == [1]
    with pytest.raises(KeyError):
        c.get('missing')


def test_resolve_service_errors():
    with pytest.raises(HTTPException) as exc:
        resolve_service(make_request(None), 'x')
    assert exc.value.status_code == 500
    with pytest.raises(HTTPException):
        resolve_service(make_request(ServiceContainer()), 'x')
    c = ServiceContainer()
    c.register_singleton('x', 'ok')
    assert resolve_service(make_request(c), 'x') == 'ok'


def test_registration_replaces_previous_one():
    c = ServiceContainer()
    c.register_factory('svc', lambda: 'lazy')
    c.register_singleton('svc', 'eager')
    assert c.get('svc') == 'eager'
    c.register_factory('svc', lambda: 'rebuilt')
    assert c.get('svc') == 'rebuilt'
    assert 'svc' in c
    assert 'other' not in c
    assert list(c) == ['svc']


def test_app_builds_default_persistence_service_on_first_use():
    from prefs_lib.remote import MemoryPersistenceService
    from prefs_lib.server import create_app

    app = create_app()
    container = app.state.container
    assert sorted(container) == ['config', 'persistence_service', 'preferences_factory']
    service = container.get('persistence_service')
    assert isinstance(service, MemoryPersistenceService)
    assert container.get('persistence_service') is service
