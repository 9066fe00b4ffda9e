"""FastAPI route definitions."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..clients.geocoding import GeocodingClient
from ..config import get_yaml_setting
from ..models.errors import (
    GeocodeFailure,
    NotFoundError,
    ResolutionError,
    SearchInProgressError,
    ServiceError,
)
from ..models.geo import Coordinate
from ..models.requests import InputsUpdateRequest, ResolveRequest, SessionCreateRequest
from ..models.route import RouteResult
from ..processing.presentation import RouteSession, failure_message
from ..processing.resolver import RouteResolver
from ..storage.sessions import SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter()


# Dependencies (set in main.py)
_resolver: Optional[RouteResolver] = None
_geocoder: Optional[GeocodingClient] = None


def get_resolver() -> RouteResolver:
    """Get the resolver instance."""
    if _resolver is None:
        raise HTTPException(status_code=503, detail="Resolver not initialized")
    return _resolver


def get_geocoder() -> GeocodingClient:
    """Get the geocoding client instance."""
    if _geocoder is None:
        raise HTTPException(status_code=503, detail="Geocoder not initialized")
    return _geocoder


def set_services(geocoder: Optional[GeocodingClient], resolver: Optional[RouteResolver]):
    """Set the geocoder and resolver (called from main.py)."""
    global _geocoder, _resolver
    _geocoder = geocoder
    _resolver = resolver


def get_session(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> RouteSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session


def _camera_padding() -> int:
    return int(get_yaml_setting("map", "camera_padding_px", default=100))


def _resolution_http_error(error: ResolutionError) -> HTTPException:
    """Map a resolution failure to a status code and a field-naming message."""
    if isinstance(error, GeocodeFailure):
        status_code = 502 if error.service_only else 404
    else:
        status_code = 422
    return HTTPException(
        status_code=status_code,
        detail={
            "kind": error.kind,
            "message": failure_message(error),
            "fields": [label.value for label in error.fields],
        },
    )


@router.get("/health")
async def health_check(geocoder: Annotated[GeocodingClient, Depends(get_geocoder)]):
    """Health check endpoint - does NOT call the geocoder to preserve rate limits."""
    return {
        "status": "ok",
        "geocoding_provider": geocoder.name,
    }


@router.post("/resolve")
async def resolve_route(
    request: ResolveRequest,
    resolver: Annotated[RouteResolver, Depends(get_resolver)],
):
    """Resolve two free-text endpoints into a straight-line route."""
    try:
        outcome = await resolver.resolve_text(request.start, request.end)
    except Exception as e:
        logger.exception("Route resolution failed")
        raise HTTPException(status_code=500, detail=str(e))

    if isinstance(outcome, RouteResult):
        return outcome.model_dump(mode="json")

    logger.info(f"Route not resolved: {outcome}")
    raise _resolution_http_error(outcome)


@router.get("/reverse-geocode")
async def reverse_geocode(
    geocoder: Annotated[GeocodingClient, Depends(get_geocoder)],
    lat: Annotated[float, Query(ge=-90, le=90)],
    lon: Annotated[float, Query(ge=-180, le=180)],
):
    """Address for a device position, used to prefill the start field."""
    coordinate = Coordinate(latitude=lat, longitude=lon)
    try:
        address = await geocoder.reverse_lookup(coordinate)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ServiceError as e:
        logger.warning(f"Reverse geocoding failed: {e}")
        raise HTTPException(status_code=502, detail=e.message)

    return {"address": address, "coordinate": coordinate.model_dump()}


@router.post("/sessions", status_code=201)
async def create_session(
    request: SessionCreateRequest,
    store: Annotated[SessionStore, Depends(get_session_store)],
):
    """Open a route session, optionally prefilled."""
    session = store.create(start_text=request.start or "", end_text=request.end or "")
    return session.to_dict(_camera_padding())


@router.get("/sessions/{session_id}")
async def read_session(session: Annotated[RouteSession, Depends(get_session)]):
    """Current inputs, state and render model."""
    return session.to_dict(_camera_padding())


@router.put("/sessions/{session_id}/inputs")
async def update_inputs(
    request: InputsUpdateRequest,
    session: Annotated[RouteSession, Depends(get_session)],
):
    """Edit the start and/or end text."""
    session.update_inputs(start_text=request.start, end_text=request.end)
    return session.to_dict(_camera_padding())


@router.post("/sessions/{session_id}/search")
async def search_session(
    session: Annotated[RouteSession, Depends(get_session)],
    resolver: Annotated[RouteResolver, Depends(get_resolver)],
):
    """Run a search from the session's current text fields."""
    try:
        await session.search(resolver)
    except SearchInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.exception("Session search failed")
        raise HTTPException(status_code=500, detail=str(e))

    return session.to_dict(_camera_padding())


@router.post("/sessions/{session_id}/swap")
async def swap_session(session: Annotated[RouteSession, Depends(get_session)]):
    """Exchange start and end text. Does not search."""
    session.swap()
    return session.to_dict(_camera_padding())


@router.post("/sessions/{session_id}/clear")
async def clear_session(session: Annotated[RouteSession, Depends(get_session)]):
    """Empty both fields and return to idle."""
    session.clear()
    return session.to_dict(_camera_padding())


@router.delete("/sessions/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
):
    """Drop a session."""
    if not store.remove(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
