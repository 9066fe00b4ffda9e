"""Pydantic models and error types for the route map service."""

from .geo import Coordinate, BoundingBox
from .route import EndpointLabel, EndpointInput, RouteResult
from .errors import (
    GeocodingError,
    NotFoundError,
    ServiceError,
    ResolutionError,
    ValidationError,
    GeocodeFailure,
    SearchInProgressError,
)
from .presentation import (
    RouteStatus,
    RoutePresentationState,
    MapMarker,
    MapPolyline,
    InfoPanel,
    CameraUpdate,
    RouteView,
)
from .requests import (
    ResolveRequest,
    SessionCreateRequest,
    InputsUpdateRequest,
)

__all__ = [
    # Geometry values
    "Coordinate",
    "BoundingBox",
    # Resolution
    "EndpointLabel",
    "EndpointInput",
    "RouteResult",
    # Errors
    "GeocodingError",
    "NotFoundError",
    "ServiceError",
    "ResolutionError",
    "ValidationError",
    "GeocodeFailure",
    "SearchInProgressError",
    # Presentation
    "RouteStatus",
    "RoutePresentationState",
    "MapMarker",
    "MapPolyline",
    "InfoPanel",
    "CameraUpdate",
    "RouteView",
    # API requests
    "ResolveRequest",
    "SessionCreateRequest",
    "InputsUpdateRequest",
]
