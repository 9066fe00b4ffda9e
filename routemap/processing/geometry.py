"""
Straight-line route geometry.

Pure functions, no I/O: great-circle distance, a constant-speed travel
time estimate and the viewport that frames two points.
"""

import math

from ..models.geo import BoundingBox, Coordinate

EARTH_RADIUS_M = 6_371_000.0

# Placeholder for a routing-service duration; not road-aware.
DEFAULT_SPEED_KPH = 40.0


def distance(a: Coordinate, b: Coordinate) -> float:
    """
    Great-circle distance between two coordinates in meters (haversine).

    Uses a spherical Earth with mean radius 6 371 km, so results can be off
    by up to ~0.5% against the ellipsoid.
    """
    if a == b:
        return 0.0

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def estimate_eta_minutes(distance_meters: float, assumed_speed_kph: float = DEFAULT_SPEED_KPH) -> float:
    """
    Travel time in minutes at a constant assumed speed.

    minutes = (distance_meters / 1000) / assumed_speed_kph * 60
    """
    if distance_meters < 0:
        raise ValueError(f"distance_meters must be >= 0, got {distance_meters}")
    if assumed_speed_kph <= 0:
        raise ValueError(f"assumed_speed_kph must be > 0, got {assumed_speed_kph}")
    return (distance_meters / 1000) / assumed_speed_kph * 60


def bounding_box(a: Coordinate, b: Coordinate) -> BoundingBox:
    """Componentwise min/max of two coordinates. No antimeridian handling."""
    return BoundingBox(
        southwest=Coordinate(
            latitude=min(a.latitude, b.latitude),
            longitude=min(a.longitude, b.longitude),
        ),
        northeast=Coordinate(
            latitude=max(a.latitude, b.latitude),
            longitude=max(a.longitude, b.longitude),
        ),
    )


def format_distance(distance_meters: float) -> str:
    """149012.3 -> '149.01 km'"""
    return f"{distance_meters / 1000:.2f} km"


def format_duration(minutes: float) -> str:
    """223.5 -> '224 min'"""
    return f"{round(minutes)} min"
