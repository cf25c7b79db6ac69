import uuid
from datetime import datetime, timezone
from typing import List, Sequence

from sqlalchemy import Row, text
from sqlalchemy.ext.asyncio import AsyncSession

from models.location_model import LocationRecord, NewLocation

LIKE_ESCAPE = "!"

CREATE_LOCATIONS_TABLE = """
    CREATE TABLE IF NOT EXISTS locations (
        id VARCHAR(36) PRIMARY KEY,
        source TEXT NOT NULL,
        source_lat DOUBLE PRECISION NOT NULL,
        source_lon DOUBLE PRECISION NOT NULL,
        destination TEXT NOT NULL,
        destination_lat DOUBLE PRECISION NOT NULL,
        destination_lon DOUBLE PRECISION NOT NULL,
        created_at VARCHAR(40) NOT NULL
    )
"""

SELECT_COLUMNS = """
    SELECT id, source, source_lat, source_lon,
           destination, destination_lat, destination_lon
    FROM locations
"""


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _row_to_record(row: Row) -> LocationRecord:
    return LocationRecord(
        id=row.id,
        source=row.source,
        sourceCoords=(row.source_lat, row.source_lon),
        destination=row.destination,
        destinationCoords=(row.destination_lat, row.destination_lon),
    )


class LocationRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_table(self) -> None:
        await self.session.execute(text(CREATE_LOCATIONS_TABLE))

    async def insert(self, location: NewLocation) -> LocationRecord:
        record_id = str(uuid.uuid4())
        await self.session.execute(
            text("""
                INSERT INTO locations
                (id, source, source_lat, source_lon,
                 destination, destination_lat, destination_lon, created_at)
                VALUES (:id, :source, :source_lat, :source_lon,
                        :destination, :destination_lat, :destination_lon, :created_at)
            """),
            {
                "id": record_id,
                "source": location.source,
                "source_lat": location.sourceCoords[0],
                "source_lon": location.sourceCoords[1],
                "destination": location.destination,
                "destination_lat": location.destinationCoords[0],
                "destination_lon": location.destinationCoords[1],
                "created_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        return LocationRecord(id=record_id, **location.model_dump())

    async def find_all(self) -> List[LocationRecord]:
        result = await self.session.execute(
            text(SELECT_COLUMNS + " ORDER BY created_at, id")
        )
        return self._to_records(result.fetchall())

    async def search(self, query: str) -> List[LocationRecord]:
        pattern = f"%{escape_like(query.lower())}%"
        result = await self.session.execute(
            text(
                SELECT_COLUMNS
                + f"""
                WHERE LOWER(source) LIKE :pattern ESCAPE '{LIKE_ESCAPE}'
                   OR LOWER(destination) LIKE :pattern ESCAPE '{LIKE_ESCAPE}'
                ORDER BY created_at, id
                """
            ),
            {"pattern": pattern},
        )
        return self._to_records(result.fetchall())

    @staticmethod
    def _to_records(rows: Sequence[Row]) -> List[LocationRecord]:
        return [_row_to_record(row) for row in rows]
