import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
import structlog

from config.app_config import AppConfig
from core.infrastructure.http_client import init_http_client, close_http_client
from core.metadata import SERVICE_NAME, VERSION
from db import dispose_engine, get_engine
from services.geo.geo_resolver import GeoResolver
from services.locations.location_store import LocationStore
from services.locations.resolution_service import ResolutionService

logger = structlog.get_logger(__name__)

STARTUP_BANNER = """
╔══════════════════════════════════════════════╗
║  {service} v{version}
║  Python {python} | env: {env} | {log_level}
╚══════════════════════════════════════════════╝"""

SHUTDOWN_BANNER = """
╔══════════════════════════════════════════════╗
║  {service} v{version} shutting down
╚══════════════════════════════════════════════╝"""


async def initialize_storage(config: AppConfig) -> LocationStore:
    store = LocationStore(get_engine(config.database_url))
    await store.ensure_schema()
    logger.info("Database connected", component="db")
    return store


async def cleanup_database() -> None:
    try:
        await dispose_engine()
        logger.info("Database engine disposed", component="db")
    except Exception as e:
        logger.error(
            "Error during DB dispose",
            component="db",
            error=str(e),
            exc_info=True,
        )


async def start_services(app: FastAPI) -> None:
    config: AppConfig = app.state.config
    store = await initialize_storage(config)

    init_http_client(
        timeout=config.geocoding_timeout_seconds,
        user_agent=config.geocoding_user_agent,
    )
    logger.info("HTTP client initialized", component="http")

    resolver = GeoResolver(
        base_url=config.geocoding_api,
        country=config.country,
    )
    app.state.resolution_service = ResolutionService(resolver, store)

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    python_version = sys.version.split()[0]

    print(
        STARTUP_BANNER.format(
            service=SERVICE_NAME,
            version=VERSION,
            python=python_version,
            env=config.environment,
            log_level=log_level,
        )
    )
    logger.info(
        "Service started",
        service=SERVICE_NAME,
        version=VERSION,
        python=python_version,
        environment=config.environment,
        log_level=log_level,
        country=config.country,
        geocoding_enabled=resolver.enabled,
    )


async def stop_services(app: FastAPI) -> None:
    print(SHUTDOWN_BANNER.format(service=SERVICE_NAME, version=VERSION))
    logger.info("Service shutting down", service=SERVICE_NAME, version=VERSION)
    await app.state.sync_namespace.shutdown()
    app.state.sync_hub.close()
    await cleanup_database()
    await close_http_client()
    logger.info("HTTP client closed", component="http")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await start_services(app)
    except Exception as e:
        logger.error("Startup failed", error=str(e), exc_info=True)
        await stop_services(app)
        raise

    try:
        yield
    finally:
        await stop_services(app)
