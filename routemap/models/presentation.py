"""Presentation state and the render model read by map clients."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .geo import BoundingBox, Coordinate
from .route import EndpointLabel, RouteResult


class RouteStatus(str, Enum):
    """Lifecycle of one search as seen by the presentation layer."""
    IDLE = "idle"
    SEARCHING = "searching"
    RESOLVED = "resolved"
    FAILED = "failed"


class RoutePresentationState(BaseModel):
    """
    Snapshot of the presentation state machine.

    `generation` increases on every search and clear; a result is only
    applied while the state is SEARCHING with the same generation.
    """
    model_config = ConfigDict(frozen=True)

    status: RouteStatus = RouteStatus.IDLE
    generation: int = Field(default=0, ge=0)
    result: Optional[RouteResult] = None
    reason: Optional[str] = None
    failed_fields: tuple[EndpointLabel, ...] = ()


class MapMarker(BaseModel):
    """A pin on the map."""
    marker_id: EndpointLabel
    position: Coordinate
    title: str
    snippet: str
    hue: str = Field(description="Marker colour: green for start, red for end")


class MapPolyline(BaseModel):
    """Straight connecting line between the two markers."""
    polyline_id: str = "route"
    points: list[Coordinate]
    color: str = "blue"
    width: int = 5


class InfoPanel(BaseModel):
    """Distance/duration panel texts."""
    distance: str
    duration: str


class CameraUpdate(BaseModel):
    """Camera move that frames both endpoints."""
    bounds: BoundingBox
    padding_px: int = 100


class RouteView(BaseModel):
    """Everything a map client needs to draw the current state."""
    status: RouteStatus
    loading: bool = False
    search_enabled: bool = True
    markers: list[MapMarker] = Field(default_factory=list)
    polylines: list[MapPolyline] = Field(default_factory=list)
    info: Optional[InfoPanel] = None
    camera: Optional[CameraUpdate] = None
    message: Optional[str] = None
