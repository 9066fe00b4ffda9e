"""
Configuration module with strict environment variable validation.

Server settings and secrets come from the environment (.env is honoured).
Tunables are centralized in config.yaml - modify there, not in code.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Any

import yaml


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


# Load YAML config once at module level
_CONFIG_PATH = Path(__file__).parent / "config.yaml"
_YAML_CONFIG: dict = {}

GEOCODING_PROVIDERS = ("google", "nominatim")


def _load_yaml_config() -> dict:
    """Load configuration from config.yaml file."""
    global _YAML_CONFIG
    if not _YAML_CONFIG:
        if _CONFIG_PATH.exists():
            with open(_CONFIG_PATH, "r") as f:
                _YAML_CONFIG = yaml.safe_load(f) or {}
        else:
            raise ConfigurationError(f"Configuration file not found: {_CONFIG_PATH}")
    return _YAML_CONFIG


def get_yaml_setting(*keys: str, default: Any = None) -> Any:
    """
    Get a setting from config.yaml by walking nested keys.

    Example: get_yaml_setting("routing", "assumed_speed_kph") -> 40
    """
    config = _load_yaml_config()
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


def get_required_env(key: str) -> str:
    """Get a required environment variable. Raises if not set."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        raise ConfigurationError(
            f"Missing required environment variable: {key}\n"
            f"Please set {key} in your .env file or environment."
        )
    return value.strip()


def get_optional_env(key: str) -> Optional[str]:
    """Get an optional environment variable. Returns None if not set."""
    value = os.environ.get(key)
    if value is None or value.strip() == "":
        return None
    return value.strip()


@dataclass(frozen=True)
class Config:
    """Application configuration - immutable after creation."""

    # Server settings - REQUIRED
    backend_port: int
    backend_host: str

    # CORS settings - REQUIRED
    cors_origins: list[str]

    # Geocoding
    geocoding_provider: str
    google_maps_api_key: Optional[str]
    geocoding_timeout_s: float
    nominatim_url: str
    nominatim_user_agent: str
    geocoding_language: Optional[str]
    geocoding_region: Optional[str]

    # Route estimate
    assumed_speed_kph: float

    # Sessions
    max_sessions: int

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables and config.yaml."""

        backend_host = get_required_env("BACKEND_HOST")
        port_str = get_required_env("BACKEND_PORT")
        try:
            backend_port = int(port_str)
        except ValueError:
            raise ConfigurationError(f"BACKEND_PORT must be an integer, got {port_str!r}")

        cors_origins_str = get_required_env("CORS_ORIGINS")
        cors_origins = [origin.strip() for origin in cors_origins_str.split(",")]

        google_maps_api_key = get_optional_env("GOOGLE_MAPS_API_KEY")

        # Explicit provider wins; otherwise Google when a key is present
        provider = get_optional_env("GEOCODING_PROVIDER")
        if provider is None:
            provider = "google" if google_maps_api_key else "nominatim"
        provider = provider.lower()
        if provider not in GEOCODING_PROVIDERS:
            raise ConfigurationError(
                f"Unknown GEOCODING_PROVIDER: {provider}. "
                f"Available: {', '.join(GEOCODING_PROVIDERS)}"
            )
        if provider == "google" and not google_maps_api_key:
            raise ConfigurationError(
                "GEOCODING_PROVIDER is 'google' but GOOGLE_MAPS_API_KEY is not set"
            )

        assumed_speed_kph = float(get_yaml_setting("routing", "assumed_speed_kph", default=40))
        if assumed_speed_kph <= 0:
            raise ConfigurationError("routing.assumed_speed_kph must be positive")

        return cls(
            backend_port=backend_port,
            backend_host=backend_host,
            cors_origins=cors_origins,
            geocoding_provider=provider,
            google_maps_api_key=google_maps_api_key,
            geocoding_timeout_s=float(get_yaml_setting("geocoding", "timeout_s", default=10.0)),
            nominatim_url=get_yaml_setting(
                "geocoding", "nominatim", "base_url",
                default="https://nominatim.openstreetmap.org",
            ),
            nominatim_user_agent=get_yaml_setting(
                "geocoding", "nominatim", "user_agent", default="routemap/1.0"
            ),
            geocoding_language=get_yaml_setting("geocoding", "language"),
            geocoding_region=get_yaml_setting("geocoding", "region"),
            assumed_speed_kph=assumed_speed_kph,
            max_sessions=int(get_yaml_setting("sessions", "max_entries", default=100)),
        )

    def validate_apis(self) -> dict[str, bool]:
        """Return which geocoding providers are configured."""
        return {
            "google": bool(self.google_maps_api_key),
            "nominatim": True,  # No key needed
        }


def load_config() -> Config:
    """Load and validate configuration."""
    from dotenv import load_dotenv

    # Load .env file if present
    load_dotenv()

    return Config.from_env()
