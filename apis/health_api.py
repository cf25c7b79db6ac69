from fastapi import APIRouter, Depends

from core.metadata import SERVICE_NAME, VERSION
from dependencies.service_dependencies import get_sync_hub
from realtime.sync_hub import SyncHub

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health(hub: SyncHub = Depends(get_sync_hub)):
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": VERSION,
        "participants": hub.participant_count,
    }
