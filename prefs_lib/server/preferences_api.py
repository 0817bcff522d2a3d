"""
REST API endpoints for preferences management.

Preferences are addressed by application name and context name and are
read and written through the store built by the `preferences_factory`
service.
"""
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from prefs_lib.errors import InvalidKeyError, SerializationError
from prefs_lib.services import resolve_service

import logging
router = APIRouter()
logger = logging.getLogger(__name__)


class PreferencesPayload(BaseModel):
    preferences: Dict[str, Any] = {}


def _store(request: Request, app: str):
    factory = resolve_service(request, 'preferences_factory')
    store = factory(app)
    if not store.initialized:
        raise HTTPException(status_code=503, detail='Preferences storage not available')
    return store


@router.get('/preferences/{app}')
async def api_preferences_contexts(request: Request, app: str):
    """List the contexts stored for `app`."""
    store = _store(request, app)
    try:
        contexts = store.list_contexts()
    except SerializationError as e:
        logger.error("Error listing preferences for %s: %s", app, e)
        raise HTTPException(status_code=500, detail=str(e))
    if contexts is None:
        raise HTTPException(status_code=404, detail='No preferences stored')
    return {'application': app, 'contexts': contexts}


@router.get('/preferences/{app}/{context}')
async def api_preferences_get(request: Request, app: str, context: str):
    store = _store(request, app)
    try:
        if not store.exists(context):
            raise HTTPException(status_code=404, detail='Preferences not found')
        store.load(context)
    except SerializationError as e:
        logger.error("Error loading preferences %s/%s: %s", app, context, e)
        raise HTTPException(status_code=500, detail=str(e))
    return {'application': app, 'context': context, 'preferences': store.as_dict()}


@router.get('/preferences/{app}/{context}/dump', response_class=PlainTextResponse)
async def api_preferences_dump(request: Request, app: str, context: str):
    store = _store(request, app)
    try:
        if not store.exists(context):
            raise HTTPException(status_code=404, detail='Preferences not found')
        return store.dump(context)
    except SerializationError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.put('/preferences/{app}/{context}')
async def api_preferences_put(request: Request, app: str, context: str, payload: PreferencesPayload):
    """Replace the preferences of a context and save them.

    Body:
        {"preferences": {"theme": "dark", "fontSize": 12}}
    """
    store = _store(request, app)
    store.clear()
    try:
        for key, value in payload.preferences.items():
            store.put(key, value)
        store.save(context)
    except InvalidKeyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SerializationError as e:
        logger.error("Error saving preferences %s/%s: %s", app, context, e)
        raise HTTPException(status_code=500, detail=str(e))
    logger.info("Saved %d preferences for %s/%s", len(store), app, context)
    return {'ok': True, 'application': app, 'context': context, 'count': len(store)}


@router.delete('/preferences/{app}/{context}')
async def api_preferences_delete(request: Request, app: str, context: str):
    store = _store(request, app)
    try:
        deleted = store.delete(context)
    except SerializationError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail='Preferences not found')
    return {'ok': True, 'application': app, 'context': context}
