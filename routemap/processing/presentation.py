"""
Presentation state machine for a route search.

    IDLE --search--> SEARCHING --result--> RESOLVED
                              +--error---> FAILED
    any --clear--> IDLE

Transitions are pure functions over RoutePresentationState. RouteSession
owns the two text fields and the current state for one client; the
resolver itself never sees this state.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Union

from ..models.errors import GeocodeFailure, ResolutionError, SearchInProgressError, ValidationError
from ..models.presentation import (
    CameraUpdate,
    InfoPanel,
    MapMarker,
    MapPolyline,
    RoutePresentationState,
    RouteStatus,
    RouteView,
)
from ..models.route import EndpointInput, EndpointLabel, RouteResult
from .resolver import RouteResolver

logger = logging.getLogger(__name__)

Outcome = Union[RouteResult, ResolutionError]

ROUTE_FOUND_MESSAGE = "Route found!"


def begin_search(state: RoutePresentationState) -> RoutePresentationState:
    """Enter SEARCHING, dropping any previous route or failure."""
    if state.status is RouteStatus.SEARCHING:
        raise SearchInProgressError(
            f"Search {state.generation} is still in progress"
        )
    return RoutePresentationState(
        status=RouteStatus.SEARCHING,
        generation=state.generation + 1,
    )


def complete_search(
    state: RoutePresentationState, generation: int, outcome: Outcome
) -> RoutePresentationState:
    """
    Apply a finished resolution.

    The outcome is discarded (state returned unchanged) unless the state is
    still SEARCHING for the same generation that produced it.
    """
    if state.status is not RouteStatus.SEARCHING or state.generation != generation:
        logger.debug(
            f"Discarding stale result for search {generation} "
            f"(now {state.status.value} at {state.generation})"
        )
        return state

    if isinstance(outcome, RouteResult):
        return RoutePresentationState(
            status=RouteStatus.RESOLVED,
            generation=generation,
            result=outcome,
        )

    return RoutePresentationState(
        status=RouteStatus.FAILED,
        generation=generation,
        reason=failure_message(outcome),
        failed_fields=outcome.fields,
    )


def fail_search(
    state: RoutePresentationState, generation: int, reason: str
) -> RoutePresentationState:
    """Move a SEARCHING state to FAILED with a free-form reason."""
    if state.status is not RouteStatus.SEARCHING or state.generation != generation:
        return state
    return RoutePresentationState(
        status=RouteStatus.FAILED, generation=generation, reason=reason
    )


def clear_state(state: RoutePresentationState) -> RoutePresentationState:
    """Back to IDLE. Bumps the generation so an in-flight result is dropped."""
    return RoutePresentationState(status=RouteStatus.IDLE, generation=state.generation + 1)


def _field_names(labels: tuple[EndpointLabel, ...]) -> str:
    if set(labels) == set(EndpointLabel):
        return "starting and ending locations"
    return " and ".join(label.field_name for label in labels)


def failure_message(error: ResolutionError) -> str:
    """Short user-facing message naming the failing field(s)."""
    if isinstance(error, ValidationError):
        if set(error.fields) == set(EndpointLabel):
            return "Please enter both starting and ending locations"
        return f"Please enter the {_field_names(error.fields)}"

    if isinstance(error, GeocodeFailure):
        if error.service_only:
            return (
                f"Location service unavailable for the {_field_names(error.fields)}. "
                "Please try again."
            )
        return f"Could not find the {_field_names(error.fields)}"

    return str(error) or "Could not find a route"


def render(state: RoutePresentationState, padding_px: int = 100) -> RouteView:
    """
    Build what a map client draws for this state.

    Only RESOLVED carries markers, the polyline, the info panel and a camera
    move; every other state renders an empty map.
    """
    if state.status is RouteStatus.SEARCHING:
        return RouteView(status=state.status, loading=True, search_enabled=False)

    if state.status is RouteStatus.FAILED:
        return RouteView(status=state.status, message=state.reason)

    if state.status is RouteStatus.IDLE or state.result is None:
        return RouteView(status=state.status)

    result = state.result
    return RouteView(
        status=state.status,
        markers=[
            MapMarker(
                marker_id=EndpointLabel.START,
                position=result.start_coord,
                title="Start",
                snippet=result.start.raw_text,
                hue="green",
            ),
            MapMarker(
                marker_id=EndpointLabel.END,
                position=result.end_coord,
                title="End",
                snippet=result.end.raw_text,
                hue="red",
            ),
        ],
        polylines=[MapPolyline(points=[result.start_coord, result.end_coord])],
        info=InfoPanel(distance=result.distance_text, duration=result.duration_text),
        camera=CameraUpdate(bounds=result.viewport, padding_px=padding_px),
        message=ROUTE_FOUND_MESSAGE,
    )


class RouteSession:
    """
    The text fields and presentation state of one client.

    swap() and clear() never call the resolver. search() is rejected with
    SearchInProgressError while a previous search is outstanding.
    """

    def __init__(
        self,
        start_text: str = "",
        end_text: str = "",
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.start_text = start_text or ""
        self.end_text = end_text or ""
        self.state = RoutePresentationState()
        self.created_at = datetime.now(timezone.utc)
        self.updated_at = self.created_at

    def _touch(self):
        self.updated_at = datetime.now(timezone.utc)

    def update_inputs(self, start_text: Optional[str] = None, end_text: Optional[str] = None):
        """Replace either text field; None leaves it as is."""
        if start_text is not None:
            self.start_text = start_text
        if end_text is not None:
            self.end_text = end_text
        self._touch()

    def prefill_start(self, address: str) -> bool:
        """Fill the start field from a located address unless the user typed one."""
        if self.start_text.strip():
            return False
        self.start_text = address
        self._touch()
        return True

    def swap(self):
        """Exchange start and end text."""
        self.start_text, self.end_text = self.end_text, self.start_text
        self._touch()

    def clear(self):
        """Empty both fields and drop any route."""
        self.start_text = ""
        self.end_text = ""
        self.state = clear_state(self.state)
        self._touch()

    async def search(self, resolver: RouteResolver) -> RoutePresentationState:
        """Run one search from the current text fields."""
        self.state = begin_search(self.state)
        generation = self.state.generation
        start = EndpointInput.start(self.start_text)
        end = EndpointInput.end(self.end_text)
        self._touch()

        try:
            outcome = await resolver.resolve(start, end)
        except Exception as e:
            self.state = fail_search(self.state, generation, f"Error finding route: {e}")
            self._touch()
            raise

        self.state = complete_search(self.state, generation, outcome)
        self._touch()
        return self.state

    def view(self, padding_px: int = 100) -> RouteView:
        return render(self.state, padding_px=padding_px)

    def to_dict(self, padding_px: int = 100) -> dict:
        """Serialize for API responses."""
        return {
            "session_id": self.session_id,
            "start": self.start_text,
            "end": self.end_text,
            "state": self.state.model_dump(mode="json"),
            "view": self.view(padding_px).model_dump(mode="json"),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
