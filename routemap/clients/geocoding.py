"""
Geocoding client interface.

A client resolves a free-text address into a Coordinate with one outbound
request per call. No retries and no caching: a transient failure surfaces
immediately as ServiceError.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from ..models.errors import NotFoundError, ServiceError
from ..models.geo import Coordinate

logger = logging.getLogger(__name__)


class GeocodingClient(ABC):
    """Base class for address <-> coordinate lookup providers."""

    name: str = "geocoder"

    def __init__(self, timeout: float = 10.0, client: Optional[httpx.AsyncClient] = None):
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self):
        """Close the HTTP client."""
        await self._client.aclose()

    async def test_connection(self) -> bool:
        """Test API connectivity with a simple lookup."""
        try:
            await self.lookup("Pune, India")
        except NotFoundError:
            # Reachable and answering
            pass
        except ServiceError as e:
            logger.warning(f"[{self.name}] connectivity check failed: {e}")
            return False
        return True

    @abstractmethod
    async def lookup(self, address: str) -> Coordinate:
        """
        Resolve an address to its best-match coordinate.

        Raises:
            NotFoundError: the service returned zero results
            ServiceError: network, HTTP, provider-status or parse failure
        """

    @abstractmethod
    async def reverse_lookup(self, coordinate: Coordinate) -> str:
        """
        Resolve a coordinate to a short address ("street, locality, region").

        Raises:
            NotFoundError: nothing is known at this position
            ServiceError: network, HTTP, provider-status or parse failure
        """

    async def _get_json(self, url: str, params: dict, address: str) -> Any:
        """GET and decode JSON, turning transport and HTTP failures into ServiceError."""
        logger.debug(f"[{self.name}] GET {url} for {address!r}")
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ServiceError(
                address, f"{self.name} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ServiceError(address, f"Error connecting to {self.name}: {e}") from e
        except ValueError as e:
            raise ServiceError(address, f"{self.name} returned invalid JSON") from e


def join_address_parts(*parts: Optional[str]) -> str:
    """Join the non-empty parts with ', ' (street, locality, region)."""
    return ", ".join(p.strip() for p in parts if p and p.strip())
