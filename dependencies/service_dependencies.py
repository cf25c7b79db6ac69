from fastapi import Request

from realtime.sync_hub import SyncHub
from services.locations.resolution_service import ResolutionService


def get_resolution_service(request: Request) -> ResolutionService:
    return request.app.state.resolution_service


def get_sync_hub(request: Request) -> SyncHub:
    return request.app.state.sync_hub
