"""Route resolution, geometry and presentation state."""

from . import geometry
from .resolver import RouteResolver, GeocodeOutcome
from .presentation import (
    RouteSession,
    begin_search,
    complete_search,
    fail_search,
    clear_state,
    failure_message,
    render,
)

__all__ = [
    "geometry",
    "RouteResolver",
    "GeocodeOutcome",
    "RouteSession",
    "begin_search",
    "complete_search",
    "fail_search",
    "clear_state",
    "failure_message",
    "render",
]
