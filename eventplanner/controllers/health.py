from typing import Dict

from fastapi import APIRouter, Response

from eventplanner import state
from eventplanner.errors import StorageError

router = APIRouter()


@router.get("/health")
async def health(response: Response) -> Dict[str, str]:
    if state.store is None:
        response.status_code = 503
        return {"status": "degraded", "store": "disconnected"}
    try:
        await state.store.load()
    except StorageError:
        response.status_code = 503
        return {"status": "degraded", "store": "unhealthy"}
    return {"status": "ok", "store": state.store.name}
