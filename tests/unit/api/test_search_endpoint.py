"""Tests for the search endpoint."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from conftest import FakeDriver, make_results
from fastapi.testclient import TestClient

from mlwpsearch.api.app import create_app
from mlwpsearch.api.deps import set_engine
from mlwpsearch.config.settings import Settings
from mlwpsearch.core.engine import SearchEngine
from mlwpsearch.drivers.base.registry import DriverRegistry
from mlwpsearch.models.result import FacetValue

# ── Fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def engine(settings: Settings, registry: DriverRegistry) -> SearchEngine:
    return SearchEngine(settings, registry)


@pytest.fixture
def client(settings: Settings, engine: SearchEngine) -> TestClient:
    """Create a test client for the API."""
    app = create_app(settings)
    set_engine(engine)
    yield TestClient(app)
    set_engine(None)


# ══════════════════════════════════════════════════════════════════════════════
# GET /v1/search
# ══════════════════════════════════════════════════════════════════════════════


class TestSearchEndpoint:
    def test_search_returns_page(self, client: TestClient, fake_driver: FakeDriver) -> None:
        fake_driver.results = make_results(total=25, start=11)

        resp = client.get("/v1/search", params={"querytext": "solar power", "start": 11})

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "completed"
        assert data["querytext"] == "solar power"
        assert data["total"] == 25
        assert data["current_page"] == 2
        assert data["total_pages"] == 3
        assert len(data["results"]) == 10
        assert data["next_link"] == "https://example.com/search/?s=solar+power&start=21&pageLength=10"
        assert data["prev_link"] == "https://example.com/search/?s=solar+power&start=1&pageLength=10"

    def test_paging_params_forwarded(self, client: TestClient, fake_driver: FakeDriver) -> None:
        client.get("/v1/search", params={"querytext": "solar", "start": 6, "pageLength": 5})

        _, params, _ = fake_driver.calls[0]
        assert params["start"] == 6
        assert params["pageLength"] == 5

    def test_s_alias(self, client: TestClient, fake_driver: FakeDriver) -> None:
        resp = client.get("/v1/search", params={"s": "solar"})

        assert resp.status_code == 200
        assert resp.json()["querytext"] == "solar"
        assert fake_driver.calls[0][0] == "solar"

    def test_following_next_link_works(self, client: TestClient, fake_driver: FakeDriver) -> None:
        first = client.get("/v1/search", params={"querytext": "solar power"}).json()
        query = first["next_link"].split("?", 1)[1]

        client.get(f"/v1/search?{query}")

        text, params, _ = fake_driver.calls[1]
        assert text == "solar power"
        assert params["start"] == 11

    @pytest.mark.parametrize("params", [{}, {"querytext": ""}, {"querytext": "   "}])
    def test_no_query(self, client: TestClient, fake_driver: FakeDriver, params: dict) -> None:
        resp = client.get("/v1/search", params=params)

        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "no_query"
        assert data["results"] == []
        assert data["next_link"] is None
        assert data["prev_link"] is None
        assert fake_driver.calls == []

    def test_no_results(self, client: TestClient, fake_driver: FakeDriver) -> None:
        fake_driver.results = make_results(total=0)

        data = client.get("/v1/search", params={"querytext": "zzz"}).json()

        assert data["status"] == "no_results"
        assert data["total"] == 0
        assert data["next_link"] is None
        assert data["prev_link"] is None

    def test_facet_links(self, client: TestClient, fake_driver: FakeDriver) -> None:
        results = make_results(total=3)
        results.facets = {"category": [FacetValue(name="news", count=3)]}
        fake_driver.results = results

        data = client.get("/v1/search", params={"querytext": "solar"}).json()

        assert data["facet_links"] == {"category": {"news": "?s=solar+AND+category%3Anews"}}

    def test_invalid_start_returns_422(self, client: TestClient) -> None:
        resp = client.get("/v1/search", params={"querytext": "solar", "start": 0})
        assert resp.status_code == 422

    def test_engine_error_returns_500(self, client: TestClient, engine: SearchEngine) -> None:
        with patch.object(engine, "search", new_callable=AsyncMock) as mock_search:
            mock_search.side_effect = RuntimeError("unexpected")

            resp = client.get("/v1/search", params={"querytext": "solar"})

        assert resp.status_code == 500
        assert "unexpected" in resp.json()["detail"]


class TestNoDriver:
    def test_search_without_driver_is_no_query(self, settings: Settings) -> None:
        app = create_app(settings)
        set_engine(SearchEngine(settings, DriverRegistry()))
        try:
            data = TestClient(app).get("/v1/search", params={"querytext": "solar"}).json()
        finally:
            set_engine(None)

        assert data["status"] == "no_query"
