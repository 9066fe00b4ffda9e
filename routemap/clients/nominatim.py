"""
OpenStreetMap Nominatim geocoding client.
100% free, no API key required.
"""

from typing import Optional

import httpx

from ..models.errors import NotFoundError, ServiceError
from ..models.geo import Coordinate
from .geocoding import GeocodingClient, join_address_parts


class NominatimGeocodingClient(GeocodingClient):
    """
    Geocode addresses with Nominatim.

    FREE: no key, but the public server allows ~1 request/second and
    requires an identifying User-Agent.
    """

    name = "nominatim"

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "routemap/1.0",
        language: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        if client is None:
            client = httpx.AsyncClient(timeout=timeout, headers={"User-Agent": user_agent})
        super().__init__(timeout=timeout, client=client)
        self.base_url = base_url.rstrip("/")
        self.language = language

    def _params(self, **extra) -> dict:
        params = {"format": "jsonv2", **extra}
        if self.language:
            params["accept-language"] = self.language
        return params

    async def lookup(self, address: str) -> Coordinate:
        data = await self._get_json(
            f"{self.base_url}/search", self._params(q=address, limit=1), address
        )
        if not isinstance(data, list):
            raise ServiceError(address, "Unexpected Nominatim search response")
        if not data:
            raise NotFoundError(address)

        try:
            # Nominatim returns coordinates as strings
            return Coordinate(latitude=float(data[0]["lat"]), longitude=float(data[0]["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise ServiceError(address, "Error parsing Nominatim search response") from e

    async def reverse_lookup(self, coordinate: Coordinate) -> str:
        query = f"{coordinate.latitude},{coordinate.longitude}"
        data = await self._get_json(
            f"{self.base_url}/reverse",
            self._params(lat=coordinate.latitude, lon=coordinate.longitude, addressdetails=1),
            query,
        )
        if not isinstance(data, dict):
            raise ServiceError(query, "Unexpected Nominatim reverse response")
        if "error" in data:
            raise NotFoundError(query, f"No address at {query}: {data['error']}")

        parts = data.get("address") or {}
        address = join_address_parts(
            parts.get("road"),
            parts.get("city") or parts.get("town") or parts.get("village"),
            parts.get("state"),
        )
        return address or data.get("display_name") or query
