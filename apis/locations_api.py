from typing import Optional

from fastapi import APIRouter, Depends, Query

from dependencies.service_dependencies import get_resolution_service
from models.location_model import LocationRequest, records_to_json
from services.locations.resolution_service import ResolutionService

router = APIRouter(tags=["Locations"])


@router.get("/locations")
async def list_locations(
    service: ResolutionService = Depends(get_resolution_service),
):
    records = await service.list_routes()
    return records_to_json(records)


@router.post("/locations")
async def create_location(
    req: LocationRequest,
    service: ResolutionService = Depends(get_resolution_service),
):
    result = await service.create_route(req.source, req.destination)
    return result.to_response()


@router.get("/search")
async def search_locations(
    query: Optional[str] = Query(None),
    service: ResolutionService = Depends(get_resolution_service),
):
    records = await service.search_routes(query)
    return records_to_json(records)
