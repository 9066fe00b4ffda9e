"""
Route resolution pipeline.

validate -> geocode both endpoints concurrently -> all-or-nothing
reduction -> straight-line geometry.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..clients.geocoding import GeocodingClient
from ..models.errors import GeocodeFailure, GeocodingError, ResolutionError, ValidationError
from ..models.geo import Coordinate
from ..models.route import EndpointInput, RouteResult
from . import geometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeocodeOutcome:
    """Result of one endpoint lookup: a coordinate or the error it failed with."""
    endpoint: EndpointInput
    coordinate: Optional[Coordinate] = None
    error: Optional[GeocodingError] = None

    @property
    def ok(self) -> bool:
        return self.coordinate is not None


class RouteResolver:
    """
    Resolve two free-text endpoints into a RouteResult.

    Stateless: holds only the geocoder and the speed assumption, never the
    presentation state. Every call performs two fresh lookups.
    """

    def __init__(self, geocoder: GeocodingClient, assumed_speed_kph: float = geometry.DEFAULT_SPEED_KPH):
        if assumed_speed_kph <= 0:
            raise ValueError("assumed_speed_kph must be positive")
        self.geocoder = geocoder
        self.assumed_speed_kph = assumed_speed_kph

    async def resolve(
        self, start: EndpointInput, end: EndpointInput
    ) -> Union[RouteResult, ResolutionError]:
        """
        Resolve a route. Failures are returned, not raised.

        Returns:
            RouteResult when both endpoints geocode,
            ValidationError when either text is empty (no lookups made),
            GeocodeFailure tagging the endpoint(s) that failed to geocode.
        """
        empty = tuple(e.label for e in (start, end) if e.is_empty)
        if empty:
            return ValidationError(empty)

        start_outcome, end_outcome = await asyncio.gather(
            self._geocode(start), self._geocode(end)
        )

        failures = {
            o.endpoint.label: o.error for o in (start_outcome, end_outcome) if not o.ok
        }
        if failures:
            logger.debug(f"Resolution failed for {[label.value for label in failures]}")
            return GeocodeFailure(failures)

        return self._build_result(start, end, start_outcome.coordinate, end_outcome.coordinate)

    async def resolve_text(
        self, start_text: Optional[str], end_text: Optional[str]
    ) -> Union[RouteResult, ResolutionError]:
        """Resolve straight from the raw text field values."""
        return await self.resolve(EndpointInput.start(start_text), EndpointInput.end(end_text))

    async def _geocode(self, endpoint: EndpointInput) -> GeocodeOutcome:
        # Only lookup failures become outcomes; anything else is a bug and propagates
        try:
            coordinate = await self.geocoder.lookup(endpoint.raw_text)
        except GeocodingError as e:
            return GeocodeOutcome(endpoint=endpoint, error=e)
        return GeocodeOutcome(endpoint=endpoint, coordinate=coordinate)

    def _build_result(
        self,
        start: EndpointInput,
        end: EndpointInput,
        start_coord: Coordinate,
        end_coord: Coordinate,
    ) -> RouteResult:
        distance_m = geometry.distance(start_coord, end_coord)
        return RouteResult(
            start=start,
            end=end,
            start_coord=start_coord,
            end_coord=end_coord,
            distance_meters=distance_m,
            eta_minutes=geometry.estimate_eta_minutes(distance_m, self.assumed_speed_kph),
            viewport=geometry.bounding_box(start_coord, end_coord),
        )