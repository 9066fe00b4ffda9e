"""API clients for external geocoding services."""

from ..config import Config, get_yaml_setting
from .geocoding import GeocodingClient
from .google_maps import GoogleGeocodingClient
from .nominatim import NominatimGeocodingClient


def create_geocoding_client(config: Config) -> GeocodingClient:
    """Build the geocoding client selected by configuration."""
    if config.geocoding_provider == "google":
        return GoogleGeocodingClient(
            api_key=config.google_maps_api_key,
            base_url=get_yaml_setting(
                "geocoding", "google", "base_url",
                default="https://maps.googleapis.com/maps/api/geocode/json",
            ),
            language=config.geocoding_language,
            region=config.geocoding_region,
            timeout=config.geocoding_timeout_s,
        )
    return NominatimGeocodingClient(
        base_url=config.nominatim_url,
        user_agent=config.nominatim_user_agent,
        language=config.geocoding_language,
        timeout=config.geocoding_timeout_s,
    )


__all__ = [
    "GeocodingClient",
    "GoogleGeocodingClient",
    "NominatimGeocodingClient",
    "create_geocoding_client",
]
