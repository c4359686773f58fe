"""Base search driver — Abstract interface for search backend drivers.

A driver is the only I/O boundary between the query layer and a search
backend. It receives an already-built, sanitized query value plus the
final parameter mapping and returns a page of results.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from mlwpsearch.models.result import SearchResults


class DriverHealth(BaseModel):
    """Health status of a search driver."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    message: str | None = Field(default=None, description="Additional health message")


class SearchDriver(ABC):
    """Abstract base class for search drivers.

    All drivers must implement:
      - search(): Execute a query and return a page of results
      - health_check(): Report driver health status

    Drivers are registered once at startup and then shared by every
    request handler, so they must be safe for concurrent use.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique driver name (e.g., 'marklogic')."""

    async def initialize(self) -> None:
        """Open connections. Called once before the driver is registered."""

    async def shutdown(self) -> None:
        """Close connections. Called once during application shutdown."""

    @abstractmethod
    async def search(
        self,
        query: str,
        params: dict[str, Any],
        structured: bool = False,
    ) -> SearchResults | None:
        """Execute a search against the backend.

        Args:
            query: Query text, or a serialized structured query when
                ``structured`` is true.
            params: Final search parameters (``start``, ``pageLength``,
                ``view``, ``options``, ``transform`` and any extras).
            structured: Whether ``query`` is a structured query.

        Returns:
            A page of results, or None when the backend has nothing to say.

        Raises:
            DriverError: If the backend call fails.
        """

    @abstractmethod
    async def health_check(self) -> DriverHealth:
        """Check the health of the search backend."""
