"""
Google Maps Platform geocoding client.

Requires enabling in Google Cloud Console:
- Geocoding API
"""

import logging
from typing import Optional

import httpx

from ..models.errors import NotFoundError, ServiceError
from ..models.geo import Coordinate
from .geocoding import GeocodingClient, join_address_parts

logger = logging.getLogger(__name__)


class GoogleGeocodingClient(GeocodingClient):
    """
    Client for the Google Geocoding API (forward and reverse).

    Status handling:
    - OK -> first result
    - ZERO_RESULTS -> NotFoundError
    - anything else (OVER_QUERY_LIMIT, REQUEST_DENIED, ...) -> ServiceError
    """

    name = "google"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/geocode/json",
        language: Optional[str] = None,
        region: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if not api_key:
            raise ValueError("Google Maps API key is required")
        super().__init__(timeout=timeout, client=client)
        self.api_key = api_key
        self.geocode_url = base_url
        self.language = language
        self.region = region

    def _params(self, **extra) -> dict:
        params = {"key": self.api_key, **extra}
        if self.language:
            params["language"] = self.language
        if self.region:
            params["region"] = self.region
        return params

    async def _first_result(self, params: dict, query: str) -> dict:
        data = await self._get_json(self.geocode_url, params, query)
        status = data.get("status") if isinstance(data, dict) else None

        if status == "ZERO_RESULTS":
            raise NotFoundError(query)
        if status != "OK":
            message = data.get("error_message") if isinstance(data, dict) else None
            logger.warning(f"[google] geocode status {status} for {query!r}")
            raise ServiceError(query, f"Google Geocoding status {status}: {message or 'no detail'}")

        results = data.get("results") or []
        if not results:
            raise NotFoundError(query)
        return results[0]

    async def lookup(self, address: str) -> Coordinate:
        result = await self._first_result(self._params(address=address), address)
        try:
            location = result["geometry"]["location"]
            return Coordinate(latitude=float(location["lat"]), longitude=float(location["lng"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ServiceError(address, "Error parsing Google Geocoding response") from e

    async def reverse_lookup(self, coordinate: Coordinate) -> str:
        query = f"{coordinate.latitude},{coordinate.longitude}"
        result = await self._first_result(self._params(latlng=query), query)

        components: dict[str, str] = {}
        for component in result.get("address_components", []):
            for kind in component.get("types", []):
                components.setdefault(kind, component.get("long_name", ""))

        street = " ".join(
            p for p in (components.get("street_number"), components.get("route")) if p
        )
        address = join_address_parts(
            street,
            components.get("locality") or components.get("postal_town"),
            components.get("administrative_area_level_1"),
        )
        return address or result.get("formatted_address") or query
