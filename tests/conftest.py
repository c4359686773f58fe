"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest

from mlwpsearch.config.settings import Settings
from mlwpsearch.drivers.base.driver import DriverHealth, SearchDriver
from mlwpsearch.drivers.base.registry import DriverRegistry
from mlwpsearch.models.result import SearchHit, SearchResults

FIXED_NOW = datetime(2026, 10, 18, 15, 42, 7, tzinfo=UTC)


class FakeDriver(SearchDriver):
    """In-memory driver that records every search call."""

    def __init__(self, results: SearchResults | None = None, error: Exception | None = None) -> None:
        self.results = results
        self.error = error
        self.calls: list[tuple[str, dict[str, Any], bool]] = []
        self.shut_down = False

    @property
    def name(self) -> str:
        return "fake"

    async def shutdown(self) -> None:
        self.shut_down = True

    async def search(self, query: str, params: dict[str, Any], structured: bool = False) -> SearchResults | None:
        self.calls.append((query, params, structured))
        if self.error is not None:
            raise self.error
        return self.results

    async def health_check(self) -> DriverHealth:
        return DriverHealth(status="healthy", message="fake")


def make_results(total: int = 25, start: int = 1, page_length: int = 10) -> SearchResults:
    """Build a page of results with ``min(page_length, remaining)`` hits."""
    count = max(0, min(page_length, total - start + 1))
    return SearchResults(
        total=total,
        start=start,
        page_length=page_length,
        results=[SearchHit(index=start + i, uri=f"/posts/{start + i}.json") for i in range(count)],
    )


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with a configured MarkLogic user."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        marklogic={
            "host": "ml.example.com",
            "port": 8010,
            "username": "wp",
            "password": "secret",
            "rest_config_option": "wp-options",
            "rest_transform": "wp-transform",
        },
        site={"search_page_url": "https://example.com/search/"},
    )


@pytest.fixture
def fixed_clock():
    """Clock frozen at 2026-10-18 15:42:07 UTC."""
    return lambda: FIXED_NOW


@pytest.fixture
def fake_driver() -> FakeDriver:
    return FakeDriver(results=make_results())


@pytest.fixture
def registry(fake_driver: FakeDriver) -> DriverRegistry:
    registry = DriverRegistry()
    registry.add("marklogic", fake_driver)
    return registry
