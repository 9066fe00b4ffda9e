"""Geographic value types."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Coordinate(BaseModel):
    """Latitude/longitude coordinate pair (immutable)."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(description="Latitude in decimal degrees", ge=-90, le=90)
    longitude: float = Field(description="Longitude in decimal degrees", ge=-180, le=180)

    def as_tuple(self) -> tuple[float, float]:
        """(lat, lon) tuple."""
        return (self.latitude, self.longitude)


class BoundingBox(BaseModel):
    """
    Axis-aligned lat/lng rectangle used to frame the map camera.

    Corners are ordered componentwise. There is no antimeridian handling:
    a box spanning +/-180 degrees covers the long way round.
    """
    model_config = ConfigDict(frozen=True)

    southwest: Coordinate
    northeast: Coordinate

    @model_validator(mode="after")
    def _check_corner_order(self) -> "BoundingBox":
        if self.southwest.latitude > self.northeast.latitude:
            raise ValueError("southwest latitude must not exceed northeast latitude")
        if self.southwest.longitude > self.northeast.longitude:
            raise ValueError("southwest longitude must not exceed northeast longitude")
        return self

    @property
    def center(self) -> Coordinate:
        return Coordinate(
            latitude=(self.southwest.latitude + self.northeast.latitude) / 2,
            longitude=(self.southwest.longitude + self.northeast.longitude) / 2,
        )

    @property
    def is_point(self) -> bool:
        return self.southwest == self.northeast
