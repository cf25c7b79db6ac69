from typing import List

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from exceptions.custom_exceptions import StorageException, ValidationException
from models.location_model import LocationRecord, NewLocation
from services.locations.location_repository import LocationRepository

logger = structlog.get_logger(__name__)


class LocationStore:
    """Persistence and substring search for saved routes.

    Records are insert-only. Repeated routes are stored again, there is no
    uniqueness on (source, destination).
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def ensure_schema(self) -> None:
        try:
            async with AsyncSession(self.engine) as session:
                await LocationRepository(session).create_table()
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("location_schema_failed", error=str(e), exc_info=True)
            raise StorageException("Unable to prepare location storage") from e

    async def insert(self, location: NewLocation) -> LocationRecord:
        try:
            async with AsyncSession(self.engine) as session:
                record = await LocationRepository(session).insert(location)
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("location_insert_failed", error=str(e), exc_info=True)
            raise StorageException("Error saving location") from e

        logger.info("location_saved", location_id=record.id)
        return record

    async def find_all(self) -> List[LocationRecord]:
        try:
            async with AsyncSession(self.engine) as session:
                return await LocationRepository(session).find_all()
        except (SQLAlchemyError, OSError) as e:
            logger.error("location_find_failed", error=str(e), exc_info=True)
            raise StorageException("Error fetching locations") from e

    async def search(self, query: str) -> List[LocationRecord]:
        if query is None or not query.strip():
            raise ValidationException("No search query provided")

        try:
            async with AsyncSession(self.engine) as session:
                records = await LocationRepository(session).search(query)
        except (SQLAlchemyError, OSError) as e:
            logger.error("location_search_failed", query=query, error=str(e), exc_info=True)
            raise StorageException("Error searching locations") from e

        logger.info("location_search", query=query, matches=len(records))
        return records
