"""Route resolution models - inputs and the resolved route."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .geo import BoundingBox, Coordinate


class EndpointLabel(str, Enum):
    """Which of the two route endpoints an input belongs to."""
    START = "start"
    END = "end"

    @property
    def field_name(self) -> str:
        """Human-readable name of the matching text field."""
        return "starting location" if self is EndpointLabel.START else "ending location"


class EndpointInput(BaseModel):
    """Free-text address typed for one endpoint, trimmed of whitespace."""
    model_config = ConfigDict(frozen=True)

    label: EndpointLabel
    raw_text: str = Field(default="", description="Address text, whitespace-trimmed")

    @field_validator("raw_text", mode="before")
    @classmethod
    def _trim(cls, value):
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def is_empty(self) -> bool:
        return not self.raw_text

    @classmethod
    def start(cls, text: str | None) -> "EndpointInput":
        return cls(label=EndpointLabel.START, raw_text=text)

    @classmethod
    def end(cls, text: str | None) -> "EndpointInput":
        return cls(label=EndpointLabel.END, raw_text=text)


class RouteResult(BaseModel):
    """
    A fully resolved straight-line route.

    Only built when both endpoints geocoded successfully. The ETA comes from
    a constant-speed model, not from a routing engine.
    """
    model_config = ConfigDict(frozen=True)

    start: EndpointInput
    end: EndpointInput
    start_coord: Coordinate
    end_coord: Coordinate
    distance_meters: float = Field(ge=0, description="Great-circle distance in meters")
    eta_minutes: float = Field(ge=0, description="Estimated travel time in minutes")
    viewport: BoundingBox

    @computed_field
    @property
    def distance_text(self) -> str:
        from ..processing.geometry import format_distance
        return format_distance(self.distance_meters)

    @computed_field
    @property
    def duration_text(self) -> str:
        from ..processing.geometry import format_duration
        return format_duration(self.eta_minutes)
