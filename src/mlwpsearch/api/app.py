"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mlwpsearch import __version__
from mlwpsearch.api.deps import set_engine
from mlwpsearch.api.v1.router import router as v1_router
from mlwpsearch.config.settings import Settings
from mlwpsearch.core.engine import SearchEngine
from mlwpsearch.drivers.base.registry import DriverRegistry
from mlwpsearch.drivers.marklogic.driver import create_driver
from mlwpsearch.observability.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        # Auto-detect mlwpsearch-config.yaml if present
        yaml_path = Path("mlwpsearch-config.yaml")
        if yaml_path.exists():
            logger.info("Loading configuration from %s", yaml_path)
            settings = Settings.from_yaml(yaml_path)
        else:
            settings = Settings()

    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting mlwpsearch v%s", __version__)

        # Drivers are registered once, before any request is served
        registry = DriverRegistry()
        await register_drivers(registry, settings)

        engine = SearchEngine(settings, registry)
        set_engine(engine)

        app.state.settings = settings
        app.state.engine = engine

        logger.info("mlwpsearch is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down mlwpsearch...")
        await engine.shutdown()
        set_engine(None)
        logger.info("mlwpsearch shutdown complete")

    app = FastAPI(
        title="mlwpsearch",
        description="Site search backed by MarkLogic — query building, exclusion rules and paging.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/v1")

    return app


async def register_drivers(registry: DriverRegistry, settings: Settings) -> None:
    """Create, initialise and register the configured driver.

    Without MarkLogic credentials no driver is registered and every search
    comes back empty.
    """
    driver = create_driver(settings)
    if driver is None:
        logger.warning("No MarkLogic credentials configured; searches will return no results")
        return

    try:
        await driver.initialize()
    except Exception:
        logger.warning("Failed to initialise driver '%s'", settings.search.driver, exc_info=True)
        return

    registry.add(settings.search.driver, driver)
