from typing import Optional

import httpx
import structlog

from core.infrastructure.http_client import get_http_client
from models.location_model import ResolvedPlace, validate_coordinates

logger = structlog.get_logger(__name__)


class GeoResolver:
    """Resolves free-text place names through a Nominatim-style provider.

    Only the provider's first candidate is considered, and it is accepted
    only when its display name contains the configured country token. The
    check is a plain substring match, so a name such as "New India Street,
    Ohio" passes for "India". Every provider failure is reported as "not
    found" (``None``).
    """

    def __init__(
        self,
        base_url: Optional[str],
        country: str = "India",
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self.base_url = base_url
        self.country = country
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = client

        if not self.base_url:
            logger.error(
                "geocoding_disabled",
                reason="GEOCODING_API is not set; every lookup will return not found",
            )

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    async def resolve(self, place_name: str) -> Optional[ResolvedPlace]:
        if not self.enabled:
            return None
        if not place_name or not place_name.strip():
            return None

        candidate = await self._first_candidate(place_name)
        if candidate is None:
            logger.info("geocode_not_found", place=place_name)
            return None

        display_name = candidate.get("display_name")
        if not isinstance(display_name, str) or self.country not in display_name:
            logger.info(
                "geocode_outside_country",
                place=place_name,
                display_name=display_name,
                country=self.country,
            )
            return None

        try:
            coords = validate_coordinates((candidate.get("lat"), candidate.get("lon")))
        except ValueError as e:
            logger.warning("geocode_bad_coordinates", place=place_name, error=str(e))
            return None

        return ResolvedPlace(display_name=display_name, coords=coords)

    async def _first_candidate(self, place_name: str) -> Optional[dict]:
        client = self._client or get_http_client()
        kwargs = {"params": {"q": place_name, "format": "json"}}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.user_agent:
            kwargs["headers"] = {"User-Agent": self.user_agent}

        try:
            response = await client.get(self.base_url, **kwargs)
            response.raise_for_status()
            results = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "geocode_provider_error",
                place=place_name,
                status=e.response.status_code,
            )
            return None
        except httpx.HTTPError as e:
            logger.warning("geocode_provider_unreachable", place=place_name, error=str(e))
            return None
        except ValueError as e:
            logger.warning("geocode_malformed_response", place=place_name, error=str(e))
            return None

        if not isinstance(results, list) or not results:
            return None
        first = results[0]
        return first if isinstance(first, dict) else None
