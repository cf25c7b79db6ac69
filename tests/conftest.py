"""
Shared fixtures: a throwaway SQLite database per test and sample places.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio  # type: ignore
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from models.location_model import NewLocation, ResolvedPlace
from services.locations.location_store import LocationStore


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'routes.db'}")
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def location_store(test_engine: AsyncEngine) -> LocationStore:
    store = LocationStore(test_engine)
    await store.ensure_schema()
    return store


@pytest.fixture
def delhi() -> ResolvedPlace:
    return ResolvedPlace(
        display_name="New Delhi, Delhi, India",
        coords=(28.6139, 77.2090),
    )


@pytest.fixture
def mumbai() -> ResolvedPlace:
    return ResolvedPlace(
        display_name="Mumbai, Mumbai Suburban, Maharashtra, India",
        coords=(19.0760, 72.8777),
    )


@pytest.fixture
def delhi_to_mumbai(delhi: ResolvedPlace, mumbai: ResolvedPlace) -> NewLocation:
    return NewLocation(
        source=delhi.display_name,
        sourceCoords=delhi.coords,
        destination=mumbai.display_name,
        destinationCoords=mumbai.coords,
    )
