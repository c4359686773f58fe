"""Driver Registry — Named lookup of initialized search drivers.

The registry is built once at application startup, filled by the
startup code, and then handed by reference to everything that searches.
After startup it is only read, so concurrent lookups need no locking.
"""

from __future__ import annotations

import logging

from mlwpsearch.drivers.base.driver import DriverHealth, SearchDriver

logger = logging.getLogger(__name__)


class DriverRegistry:
    """Registry of search driver instances keyed by name.

    Example:
        >>> registry = DriverRegistry()
        >>> registry.add("marklogic", MarkLogicDriver(base_url="http://localhost:8000"))
        >>> registry.get("marklogic")
        <MarkLogicDriver ...>
        >>> registry.get("solr") is None
        True
    """

    def __init__(self) -> None:
        self._drivers: dict[str, SearchDriver] = {}

    def add(self, name: str, driver: SearchDriver) -> None:
        """Register a driver instance under ``name``.

        Args:
            name: Lookup name for this driver.
            driver: An initialized driver.
        """
        if name in self._drivers:
            logger.warning("Overwriting existing driver registration: %s", name)
        self._drivers[name] = driver
        logger.info("Registered driver: %s", name)

    def get(self, name: str) -> SearchDriver | None:
        """Get a driver by name, or None if nothing is registered under it."""
        return self._drivers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._drivers

    async def health_check_all(self) -> dict[str, DriverHealth]:
        """Run health checks on all registered drivers.

        Returns:
            Dictionary mapping driver names to their health status.
        """
        results: dict[str, DriverHealth] = {}
        for name, driver in self._drivers.items():
            try:
                results[name] = await driver.health_check()
            except Exception as e:
                results[name] = DriverHealth(status="unhealthy", message=str(e))
        return results

    async def shutdown_all(self) -> None:
        """Gracefully shut down all registered drivers."""
        for name, driver in self._drivers.items():
            try:
                await driver.shutdown()
                logger.info("Shut down driver: %s", name)
            except Exception:
                logger.warning("Error shutting down driver: %s", name, exc_info=True)
        self._drivers.clear()

    @property
    def active_drivers(self) -> list[str]:
        """List all registered driver names."""
        return list(self._drivers.keys())
