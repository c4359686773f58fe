"""Health check endpoints — System and driver health monitoring."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from mlwpsearch import __version__
from mlwpsearch.api.deps import get_engine
from mlwpsearch.core.engine import SearchEngine
from mlwpsearch.drivers.base.driver import DriverHealth

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="mlwpsearch server version")
    service: str = Field(description="Service name ('mlwpsearch')")
    driver: str = Field(description="Name of the driver used for searches")
    active_drivers: list[str] = Field(description="Names of registered drivers")


class DriverHealthResponse(BaseModel):
    """Per-driver health check response."""

    drivers: dict[str, DriverHealth] = Field(description="Map of driver name to its health status")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System Health Check",
)
async def health_check(
    engine: SearchEngine = Depends(get_engine),
) -> HealthResponse:
    """Basic health check endpoint with driver info.

    Reports ``degraded`` when the configured driver is not registered,
    since every search would then come back empty.
    """
    driver = engine.settings.search.driver
    return HealthResponse(
        status="healthy" if driver in engine.registry else "degraded",
        version=__version__,
        service="mlwpsearch",
        driver=driver,
        active_drivers=engine.registry.active_drivers,
    )


@router.get(
    "/health/drivers",
    response_model=DriverHealthResponse,
    summary="Driver Health Check",
)
async def driver_health(
    engine: SearchEngine = Depends(get_engine),
) -> DriverHealthResponse:
    """Check health of all registered drivers."""
    return DriverHealthResponse(drivers=await engine.registry.health_check_all())
