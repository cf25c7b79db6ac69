from .location_repository import LocationRepository
from .location_store import LocationStore
from .resolution_service import ResolutionService

__all__ = [
    "LocationRepository",
    "LocationStore",
    "ResolutionService",
]
