from __future__ import annotations

import aiohttp
from pydantic import TypeAdapter, ValidationError

from weatherdash.config.models import EndpointSettings
from weatherdash.exceptions import NotFoundError, UpstreamError
from weatherdash.geo.views import GeocodingResult
from weatherdash.models import Coordinates, LocationDescriptor, ResolvedLocation
from weatherdash.shared.api_client import ApiClient

MIN_SUGGESTION_QUERY_LENGTH = 3
SUGGESTION_LIMIT = 5

_RESULTS_ADAPTER = TypeAdapter(list[GeocodingResult])


class GeoResolver(ApiClient):
    """
    Resolves location descriptors to coordinates via OpenWeatherMap direct geocoding.

    Explicit coordinates pass through without a request; free text is looked up
    once and the best match wins.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str,
        endpoints: EndpointSettings | None = None,
    ):
        super().__init__(session)
        self._api_key = api_key
        self._base_url = (endpoints or EndpointSettings()).geo_base_url.rstrip("/")

    async def resolve(self, descriptor: LocationDescriptor) -> ResolvedLocation:
        if isinstance(descriptor, Coordinates):
            return ResolvedLocation(lat=descriptor.lat, lon=descriptor.lon)

        results = await self._direct_lookup(
            descriptor,
            limit=1,
            failure_message="Could not find city for geocoding.",
        )
        if not results:
            raise NotFoundError(f"City not found: {descriptor}")

        best = results[0]
        self.logger.debug("Resolved %r to %s (%s, %s)", descriptor, best.label, best.lat, best.lon)
        return ResolvedLocation(lat=best.lat, lon=best.lon, display_name=best.label or None)

    async def suggest(self, query: str) -> list[str]:
        """City labels ("name, state, country") for autocomplete; never raises on upstream errors."""
        query = query.strip()
        if len(query) < MIN_SUGGESTION_QUERY_LENGTH:
            return []

        try:
            results = await self._direct_lookup(
                query,
                limit=SUGGESTION_LIMIT,
                failure_message="Could not fetch city suggestions.",
            )
        except UpstreamError as e:
            self.logger.error("Error fetching suggestions: %s", e)
            return []

        suggestions = [r.label for r in results if r.name and r.country]
        return list(dict.fromkeys(suggestions))

    async def _direct_lookup(
        self, query: str, *, limit: int, failure_message: str
    ) -> list[GeocodingResult]:
        params = {"q": query, "limit": limit, "appid": self._api_key}
        raw = await self._get_json(
            f"{self._base_url}/direct", params, failure_message=failure_message
        )
        try:
            return _RESULTS_ADAPTER.validate_python(raw or [])
        except ValidationError as e:
            self.logger.error("Unexpected geocoding payload: %s", e)
            raise UpstreamError(failure_message) from e
