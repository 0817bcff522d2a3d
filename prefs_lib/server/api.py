from fastapi import APIRouter
from .health import get_health

router = APIRouter()


@router.get('/health')
async def api_health():
    return get_health()
