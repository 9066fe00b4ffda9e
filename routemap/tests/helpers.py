"""
Shared test doubles.
"""

import asyncio
from typing import Optional

from ..clients.geocoding import GeocodingClient
from ..models.errors import NotFoundError, ServiceError
from ..models.geo import Coordinate

PUNE = Coordinate(latitude=18.5204, longitude=73.8567)
MUMBAI = Coordinate(latitude=19.0760, longitude=72.8777)

KNOWN_PLACES = {
    "Pune, India": PUNE,
    "Mumbai, India": MUMBAI,
}


class FakeGeocoder(GeocodingClient):
    """
    In-memory geocoder.

    Addresses in `places` resolve, addresses in `broken` raise ServiceError,
    everything else raises NotFoundError. Every call is recorded. When
    `gate` is set, lookups wait on it after signalling `started`.
    """

    name = "fake"

    def __init__(
        self,
        places: Optional[dict[str, Coordinate]] = None,
        broken: Optional[set[str]] = None,
        gate: Optional[asyncio.Event] = None,
    ):
        # No HTTP client
        self.places = dict(KNOWN_PLACES if places is None else places)
        self.broken = set(broken or ())
        self.gate = gate
        self.started: Optional[asyncio.Event] = None
        self.calls: list[str] = []
        self.reverse_calls: list[Coordinate] = []
        self.closed = False

    async def close(self):
        self.closed = True

    async def lookup(self, address: str) -> Coordinate:
        self.calls.append(address)
        if self.gate is not None:
            if self.started is not None:
                self.started.set()
            await self.gate.wait()
        if address in self.broken:
            try:
                raise ConnectionError("connection reset")
            except ConnectionError as e:
                raise ServiceError(address, "Error connecting to fake: connection reset") from e
        if address not in self.places:
            raise NotFoundError(address)
        return self.places[address]

    async def reverse_lookup(self, coordinate: Coordinate) -> str:
        self.reverse_calls.append(coordinate)
        for address, known in self.places.items():
            if known == coordinate:
                return address
        raise NotFoundError(f"{coordinate.latitude},{coordinate.longitude}")
