"""
REST endpoints for the URL-keyed persistence service.

Each entry is addressed by the path remainder after `/persistence/`, so a
client whose codebase is `http://host/persistence/` stores the resource
`http://host/persistence/_pivot_app_ctx.json` under `_pivot_app_ctx.json`.
"""
from typing import List

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from prefs_lib.remote import DEFAULT_MAX_SIZE
from prefs_lib.remote.http_client import MAX_SIZE_HEADER
from prefs_lib.services import resolve_service

import logging
router = APIRouter()
logger = logging.getLogger(__name__)


class CreatedEntry(BaseModel):
    name: str
    max_size: int


@router.get('/persistence')
async def api_persistence_names(request: Request, prefix: str = '') -> List[str]:
    service = resolve_service(request, 'persistence_service')
    return service.get_names(prefix) or []


@router.put('/persistence/{name:path}', status_code=201, response_model=CreatedEntry)
async def api_persistence_create(request: Request, name: str, max_size: int = DEFAULT_MAX_SIZE):
    service = resolve_service(request, 'persistence_service')
    if max_size < 0:
        raise HTTPException(status_code=400, detail='max_size must not be negative')
    try:
        granted = service.create(name, max_size)
    except FileExistsError:
        raise HTTPException(status_code=409, detail='Entry already exists')
    logger.debug("Created persistence entry %s (max_size=%d)", name, granted)
    return CreatedEntry(name=name, max_size=granted)


@router.get('/persistence/{name:path}')
async def api_persistence_read(request: Request, name: str):
    service = resolve_service(request, 'persistence_service')
    try:
        contents = service.get(name)
        data = contents.read()
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail='Entry not found')
    return Response(
        content=data,
        media_type='application/octet-stream',
        headers={MAX_SIZE_HEADER: str(contents.max_length)},
    )


@router.post('/persistence/{name:path}', status_code=204)
async def api_persistence_write(request: Request, name: str):
    service = resolve_service(request, 'persistence_service')
    data = await request.body()
    try:
        service.get(name).write(data)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail='Entry not found')
    except IOError as e:
        raise HTTPException(status_code=413, detail=str(e))
    return Response(status_code=204)


@router.delete('/persistence/{name:path}', status_code=204)
async def api_persistence_delete(request: Request, name: str):
    service = resolve_service(request, 'persistence_service')
    try:
        service.delete(name)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail='Entry not found')
    logger.debug("Deleted persistence entry %s", name)
    return Response(status_code=204)
