import asyncio
from typing import List, Optional

import structlog

from exceptions.custom_exceptions import ValidationException
from models.location_model import LocationRecord, NewLocation, RouteResult
from services.geo.distance import format_distance, haversine
from services.geo.geo_resolver import GeoResolver
from services.locations.location_store import LocationStore

logger = structlog.get_logger(__name__)


class ResolutionService:
    def __init__(self, resolver: GeoResolver, store: LocationStore):
        self.resolver = resolver
        self.store = store

    async def create_route(
        self, source_text: Optional[str], destination_text: Optional[str]
    ) -> RouteResult:
        """Resolve both places, measure the distance and save the route.

        Blank input is rejected before any provider or storage call. If
        either place cannot be resolved inside the configured country nothing
        is saved. Storage failures propagate as ``StorageException``.
        """
        if not source_text or not source_text.strip():
            raise ValidationException("source is required")
        if not destination_text or not destination_text.strip():
            raise ValidationException("destination is required")

        source, destination = await asyncio.gather(
            self.resolver.resolve(source_text),
            self.resolver.resolve(destination_text),
        )

        if source is None or destination is None:
            logger.info(
                "route_rejected",
                source=source_text,
                destination=destination_text,
                source_found=source is not None,
                destination_found=destination is not None,
            )
            raise ValidationException(
                f"Invalid locations or not in {self.resolver.country}"
            )

        distance_km = haversine(source.coords, destination.coords)

        record = await self.store.insert(
            NewLocation(
                source=source.display_name,
                sourceCoords=source.coords,
                destination=destination.display_name,
                destinationCoords=destination.coords,
            )
        )

        logger.info(
            "route_created",
            location_id=record.id,
            distance_km=distance_km,
        )
        return RouteResult(record=record, distance=format_distance(distance_km))

    async def list_routes(self) -> List[LocationRecord]:
        return await self.store.find_all()

    async def search_routes(self, query: Optional[str]) -> List[LocationRecord]:
        if query is None or not query.strip():
            raise ValidationException("No search query provided")
        return await self.store.search(query)
