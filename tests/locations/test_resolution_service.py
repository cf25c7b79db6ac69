"""
Tests for ResolutionService with a stubbed resolver.

Storage runs against SQLite unless a test needs to observe the store calls.
"""

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock

import pytest

from exceptions.custom_exceptions import StorageException, ValidationException
from models.location_model import ResolvedPlace
from services.geo.geo_resolver import GeoResolver
from services.locations.location_store import LocationStore
from services.locations.resolution_service import ResolutionService


def _resolver(places: dict) -> MagicMock:
    resolver = MagicMock(spec=GeoResolver)
    resolver.country = "India"

    async def resolve(name):
        await asyncio.sleep(0)
        return places.get(name)

    resolver.resolve = AsyncMock(side_effect=resolve)
    return resolver


@pytest.fixture
def resolver(delhi, mumbai) -> MagicMock:
    return _resolver({"Delhi": delhi, "Mumbai": mumbai})


@pytest.mark.asyncio
async def test_create_route_persists_canonical_names(
    resolver: MagicMock, location_store: LocationStore
):
    service = ResolutionService(resolver, location_store)

    result = await service.create_route("Delhi", "Mumbai")

    assert result.record.source == "New Delhi, Delhi, India"
    assert result.record.destination == "Mumbai, Mumbai Suburban, Maharashtra, India"
    assert result.record.sourceCoords == (28.6139, 77.2090)
    assert result.distance.endswith(" km")
    assert result.distance == f"{float(result.distance.split()[0]):.2f} km"
    assert await location_store.find_all() == [result.record]


@pytest.mark.asyncio
async def test_route_response_shape(resolver: MagicMock, location_store: LocationStore):
    service = ResolutionService(resolver, location_store)

    body = (await service.create_route("Delhi", "Mumbai")).to_response()

    assert set(body) == {
        "id",
        "source",
        "sourceCoords",
        "destination",
        "destinationCoords",
        "distance",
    }
    assert body["sourceCoords"] == [28.6139, 77.2090]


@pytest.mark.asyncio
async def test_search_after_create_is_case_insensitive(
    resolver: MagicMock, location_store: LocationStore
):
    service = ResolutionService(resolver, location_store)
    result = await service.create_route("Delhi", "Mumbai")

    assert result.record in await service.search_routes("Delhi")
    assert await service.search_routes("delhi") == await service.search_routes("Delhi")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "source, destination",
    [("", "Mumbai"), ("Delhi", ""), ("  ", "Mumbai"), (None, "Mumbai"), ("Delhi", None)],
)
async def test_blank_input_is_rejected_before_any_call(source, destination):
    resolver = _resolver({})
    store = MagicMock(spec=LocationStore)
    store.insert = AsyncMock()
    service = ResolutionService(resolver, store)

    with pytest.raises(ValidationException):
        await service.create_route(source, destination)

    resolver.resolve.assert_not_called()
    store.insert.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("source, destination", [("Atlantis", "Mumbai"), ("Delhi", "Atlantis")])
async def test_unresolved_place_persists_nothing(
    resolver: MagicMock, location_store: LocationStore, source, destination
):
    service = ResolutionService(resolver, location_store)

    with pytest.raises(ValidationException, match="Invalid locations or not in India"):
        await service.create_route(source, destination)

    assert await location_store.find_all() == []


@pytest.mark.asyncio
async def test_concurrent_identical_requests_both_persist(
    resolver: MagicMock, location_store: LocationStore
):
    service = ResolutionService(resolver, location_store)

    first, second = await asyncio.gather(
        service.create_route("Delhi", "Mumbai"),
        service.create_route("Delhi", "Mumbai"),
    )

    assert first.record.id != second.record.id
    assert first.record.sourceCoords == second.record.sourceCoords
    assert first.record.destinationCoords == second.record.destinationCoords
    assert len(await location_store.find_all()) == 2


@pytest.mark.asyncio
async def test_blank_search_is_rejected_before_storage(resolver: MagicMock):
    store = MagicMock(spec=LocationStore)
    store.search = AsyncMock()
    service = ResolutionService(resolver, store)

    with pytest.raises(ValidationException):
        await service.search_routes("  ")

    store.search.assert_not_called()


class TestStorageFailures(unittest.IsolatedAsyncioTestCase):
    """Storage errors surface unchanged, with no retry."""

    def setUp(self):
        self.resolver = _resolver(
            {
                "Pune": ResolvedPlace("Pune, Maharashtra, India", (18.5204, 73.8567)),
                "Goa": ResolvedPlace("Goa, India", (15.2993, 74.1240)),
            }
        )
        self.store = MagicMock(spec=LocationStore)
        self.store.insert = AsyncMock(side_effect=StorageException("Error saving location"))
        self.service = ResolutionService(self.resolver, self.store)

    async def test_insert_failure_propagates(self):
        with self.assertRaises(StorageException):
            await self.service.create_route("Pune", "Goa")

        self.store.insert.assert_awaited_once()
        self.assertEqual(self.resolver.resolve.await_count, 2)
