"""
Route Map API - Entry Point

This module initializes the FastAPI application with strict configuration
validation and a geocoding connectivity check on startup.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import load_config, ConfigurationError
from .clients import create_geocoding_client
from .processing.resolver import RouteResolver
from .storage.sessions import SessionStore, set_session_store
from .api.routes import router, set_services

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown."""
    # Startup
    logger.info("=" * 60)
    logger.info("ROUTE MAP API - STARTING")
    logger.info("=" * 60)

    try:
        # Load configuration (will fail fast if env vars missing)
        config = load_config()
        logger.info("Configuration loaded successfully")

        for provider, available in config.validate_apis().items():
            status = "CONFIGURED" if available else "NOT CONFIGURED"
            logger.info(f"  {provider}: {status}")
        logger.info(f"Geocoding provider: {config.geocoding_provider}")

        geocoder = create_geocoding_client(config)
        resolver = RouteResolver(geocoder, assumed_speed_kph=config.assumed_speed_kph)
        set_services(geocoder, resolver)
        set_session_store(SessionStore(max_entries=config.max_sessions))
        logger.info("Resolver initialized")

        # Test API connectivity
        logger.info("Testing geocoding connectivity...")
        if await geocoder.test_connection():
            logger.info(f"  {geocoder.name}: OK")
        else:
            # Don't exit - lookups will surface ServiceError per request
            logger.error(f"  {geocoder.name}: FAILED")
            logger.error("Please check your API key and network connectivity.")

        logger.info("=" * 60)
        logger.info(f"Server ready on {config.backend_host}:{config.backend_port}")
        logger.info("=" * 60)

        app.state.config = config
        app.state.geocoder = geocoder
        app.state.resolver = resolver

        yield

    except ConfigurationError as e:
        logger.error("=" * 60)
        logger.error("CONFIGURATION ERROR")
        logger.error("=" * 60)
        logger.error(str(e))
        logger.error("")
        logger.error("Please ensure all required environment variables are set.")
        logger.error("See .env.example for required variables.")
        logger.error("=" * 60)
        sys.exit(1)

    # Shutdown
    logger.info("Shutting down...")
    if hasattr(app.state, "geocoder"):
        await app.state.geocoder.close()
    set_services(None, None)
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    # Load config early to get CORS origins (will fail if config is invalid)
    try:
        config = load_config()
    except ConfigurationError:
        # Let lifespan handle the error with better messaging
        config = None

    app = FastAPI(
        title="Route Map API",
        description="Geocode two places and frame a straight-line route between them",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins if config else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    # Load config to get port
    config = load_config()

    uvicorn.run(
        "routemap.main:app",
        host=config.backend_host,
        port=config.backend_port,
        reload=False,
    )
