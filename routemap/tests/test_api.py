"""
Integration tests for the HTTP API.
Tests the complete flow from request to response with an in-memory geocoder.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from ..api.routes import router, set_services
from ..processing.resolver import RouteResolver
from ..storage.sessions import SessionStore, set_session_store
from .helpers import FakeGeocoder


def create_test_client(geocoder: FakeGeocoder = None) -> tuple[TestClient, FakeGeocoder]:
    """App with the real router and fake services, no startup checks."""
    geocoder = geocoder or FakeGeocoder()
    set_services(geocoder, RouteResolver(geocoder))
    set_session_store(SessionStore(max_entries=10))

    app = FastAPI()
    app.include_router(router, prefix="/api")
    return TestClient(app), geocoder


def test_health():
    """Health reports the provider without geocoding anything."""
    print("\n=== Testing Health ===")

    client, geocoder = create_test_client()
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "geocoding_provider": "fake"}
    assert geocoder.calls == []

    print("✓ Health works")


def test_services_not_initialized():
    """Without services the API answers 503."""
    print("\n=== Testing Uninitialized Services ===")

    client, _ = create_test_client()
    set_services(None, None)

    assert client.get("/api/health").status_code == 503
    assert client.post("/api/resolve", json={"start": "a", "end": "b"}).status_code == 503

    print("✓ 503 before startup")


def test_resolve_success():
    """POST /api/resolve returns the route with display texts."""
    print("\n=== Testing Resolve ===")

    client, _ = create_test_client()
    response = client.post("/api/resolve", json={"start": "Pune, India", "end": "Mumbai, India"})

    assert response.status_code == 200
    data = response.json()
    assert data["start_coord"] == {"latitude": 18.5204, "longitude": 73.8567}
    assert data["end_coord"] == {"latitude": 19.076, "longitude": 72.8777}
    assert abs(data["distance_meters"] - 120_152) < 500
    assert data["distance_text"] == "120.15 km"
    assert data["duration_text"] == "180 min"
    assert data["viewport"]["southwest"] == {"latitude": 18.5204, "longitude": 72.8777}
    assert data["viewport"]["northeast"] == {"latitude": 19.076, "longitude": 73.8567}

    print("✓ Resolve works")


def test_resolve_failures():
    """Validation -> 422, not found -> 404, service fault -> 502."""
    print("\n=== Testing Resolve Failures ===")

    client, geocoder = create_test_client(FakeGeocoder(broken={"Flaky"}))

    response = client.post("/api/resolve", json={"start": "", "end": "Mumbai, India"})
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["kind"] == "validation_error"
    assert detail["fields"] == ["start"]
    assert detail["message"] == "Please enter the starting location"
    assert geocoder.calls == []

    response = client.post("/api/resolve", json={"start": "Pune, India", "end": "Atlantis"})
    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["kind"] == "geocode_failure"
    assert detail["fields"] == ["end"]

    response = client.post("/api/resolve", json={"start": "Flaky", "end": "Mumbai, India"})
    assert response.status_code == 502
    assert response.json()["detail"]["fields"] == ["start"]

    print("✓ Resolve failures mapped")


def test_reverse_geocode():
    """Reverse geocoding for the current-location prefill."""
    print("\n=== Testing Reverse Geocode ===")

    client, _ = create_test_client()

    response = client.get("/api/reverse-geocode", params={"lat": 18.5204, "lon": 73.8567})
    assert response.status_code == 200
    assert response.json()["address"] == "Pune, India"

    response = client.get("/api/reverse-geocode", params={"lat": 0, "lon": 0})
    assert response.status_code == 404

    response = client.get("/api/reverse-geocode", params={"lat": 95, "lon": 0})
    assert response.status_code == 422

    print("✓ Reverse geocode works")


def test_session_flow():
    """Create, edit, search, swap, clear and delete a session."""
    print("\n=== Testing Session Flow ===")

    client, geocoder = create_test_client()

    response = client.post("/api/sessions", json={"start": "Pune, India"})
    assert response.status_code == 201
    session = response.json()
    session_id = session["session_id"]
    assert session["start"] == "Pune, India"
    assert session["state"]["status"] == "idle"

    response = client.put(f"/api/sessions/{session_id}/inputs", json={"end": "Mumbai, India"})
    assert response.status_code == 200
    assert response.json()["start"] == "Pune, India"
    assert response.json()["end"] == "Mumbai, India"

    response = client.post(f"/api/sessions/{session_id}/search")
    assert response.status_code == 200
    data = response.json()
    assert data["state"]["status"] == "resolved"
    assert data["state"]["generation"] == 1
    assert len(data["view"]["markers"]) == 2
    assert data["view"]["info"] == {"distance": "120.15 km", "duration": "180 min"}
    assert data["view"]["camera"]["padding_px"] == 100

    response = client.post(f"/api/sessions/{session_id}/swap")
    data = response.json()
    assert data["start"] == "Mumbai, India"
    assert data["end"] == "Pune, India"
    assert data["state"]["status"] == "resolved"
    assert len(geocoder.calls) == 2

    response = client.post(f"/api/sessions/{session_id}/clear")
    data = response.json()
    assert data["start"] == "" and data["end"] == ""
    assert data["state"]["status"] == "idle"
    assert data["view"]["markers"] == []

    response = client.post(f"/api/sessions/{session_id}/search")
    data = response.json()
    assert data["state"]["status"] == "failed"
    assert data["view"]["message"] == "Please enter both starting and ending locations"

    assert client.delete(f"/api/sessions/{session_id}").status_code == 204
    assert client.get(f"/api/sessions/{session_id}").status_code == 404
    assert client.delete(f"/api/sessions/{session_id}").status_code == 404

    print("✓ Session flow works")


def test_unknown_session():
    """Unknown ids are 404 on every session route."""
    print("\n=== Testing Unknown Session ===")

    client, _ = create_test_client()

    assert client.get("/api/sessions/nope").status_code == 404
    assert client.post("/api/sessions/nope/search").status_code == 404
    assert client.post("/api/sessions/nope/swap").status_code == 404
    assert client.put("/api/sessions/nope/inputs", json={}).status_code == 404

    print("✓ Unknown session is 404")


def run_all_tests():
    """Run all API tests."""
    print("\n" + "=" * 60)
    print("API INTEGRATION TESTS")
    print("=" * 60)

    test_health()
    test_services_not_initialized()
    test_resolve_success()
    test_resolve_failures()
    test_reverse_geocode()
    test_session_flow()
    test_unknown_session()

    print("\n" + "=" * 60)
    print("✅ ALL API TESTS PASSED")
    print("=" * 60)


if __name__ == "__main__":
    run_all_tests()
