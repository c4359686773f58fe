"""MarkLogic driver — Search via the MarkLogic REST API.

Talks to a MarkLogic REST app server using ``httpx`` (async). Free-text
queries go out as ``q`` (MarkLogic search grammar); structured queries go
out as ``structuredQuery`` (JSON).

Usage::

    driver = MarkLogicDriver(
        base_url="http://localhost:8000",
        username="admin",
        password="admin",
    )
    await driver.initialize()
    results = await driver.search("solar AND -status : draft", {"start": 1, "pageLength": 10})
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import httpx

from mlwpsearch.drivers.base.driver import DriverHealth, SearchDriver
from mlwpsearch.drivers.base.exceptions import ConfigurationError, ConnectionError, QueryError
from mlwpsearch.models.result import SearchResults

if TYPE_CHECKING:
    from mlwpsearch.config.settings import Settings

logger = logging.getLogger(__name__)

# Parameters forwarded to /v1/search only when non-empty.
_OPTIONAL_PARAMS = ("options", "transform")

# Parameters mapped explicitly by _build_params; every other key passes through.
_MAPPED_PARAMS = ("start", "pageLength", "view", "format", "q", "structuredQuery", *_OPTIONAL_PARAMS)


class MarkLogicDriver(SearchDriver):
    """Search driver for a MarkLogic REST instance.

    Args:
        base_url: REST app server URL, e.g. ``"http://localhost:8000"``.
        username: REST user.
        password: REST user password.
        auth: ``"digest"`` (MarkLogic's default) or ``"basic"``.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        username: str = "",
        password: str = "",
        auth: str = "digest",
        timeout: float = 30.0,
    ) -> None:
        if auth not in ("digest", "basic"):
            raise ConfigurationError(f"Unsupported auth scheme: {auth!r}")
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._auth = auth
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "marklogic"

    async def initialize(self) -> None:
        """Create the ``httpx.AsyncClient``. No request is made."""
        auth: httpx.Auth | None = None
        if self._username and self._password:
            if self._auth == "basic":
                auth = httpx.BasicAuth(self._username, self._password)
            else:
                auth = httpx.DigestAuth(self._username, self._password)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            auth=auth,
        )
        logger.info("MarkLogic driver ready for %s", self._base_url)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def search(
        self,
        query: str,
        params: dict[str, Any],
        structured: bool = False,
    ) -> SearchResults | None:
        """Run ``GET /v1/search`` and map the JSON body to ``SearchResults``."""
        if not self._client:
            raise ConnectionError("MarkLogic client not initialized.")

        request_params = self._build_params(query, params, structured)

        try:
            start = time.monotonic()
            resp = await self._client.get("/v1/search", params=request_params)
            resp.raise_for_status()
            took_ms = int((time.monotonic() - start) * 1000)
            logger.debug("MarkLogic search took %d ms: %s", took_ms, request_params)

            if resp.status_code == 204:
                return None
            data = resp.json()
        except httpx.HTTPError as e:
            raise QueryError(f"MarkLogic search failed: {e}") from e
        except ValueError as e:
            raise QueryError(f"MarkLogic returned a non-JSON search response: {e}") from e

        if not isinstance(data, dict):
            raise QueryError("MarkLogic returned an unexpected search response shape.")
        return SearchResults.from_marklogic(data)

    @staticmethod
    def _build_params(query: str, params: dict[str, Any], structured: bool) -> dict[str, Any]:
        """Translate query-layer parameters to ``/v1/search`` request params.

        Keys added by parameter hooks (``collection``, ``directory``, ``sort``
        and so on) are forwarded unchanged when non-empty.
        """
        request_params: dict[str, Any] = {
            "structuredQuery" if structured else "q": query,
            "start": params.get("start", 1),
            "pageLength": params.get("pageLength", 10),
            "view": params.get("view", "all"),
            "format": "json",
        }
        for key in _OPTIONAL_PARAMS:
            if params.get(key):
                request_params[key] = params[key]
        for key, value in params.items():
            if key not in _MAPPED_PARAMS and value not in (None, ""):
                request_params[key] = value
        return request_params

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> DriverHealth:
        """Read the REST instance properties as a liveness probe."""
        if not self._client:
            return DriverHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get("/v1/config/properties", params={"format": "json"})
            latency_ms = int((time.monotonic() - start) * 1000)

            if resp.status_code == 200:
                return DriverHealth(
                    status="healthy",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"REST instance at {self._base_url}",
                )
            return DriverHealth(
                status="degraded",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"MarkLogic returned HTTP {resp.status_code}",
            )
        except Exception as e:
            return DriverHealth(status="unhealthy", message=str(e))


def create_driver(settings: Settings) -> MarkLogicDriver | None:
    """Build a driver from settings, or None when credentials are missing.

    A site without a configured REST user simply has no search backend;
    searches then come back empty instead of failing.
    """
    options = settings.get_options()
    for required in ("username", "password"):
        if not options.get(required):
            logger.info("MarkLogic %s not configured, no driver created", required)
            return None

    ml = settings.marklogic
    return MarkLogicDriver(
        base_url=ml.base_url,
        username=ml.username,
        password=ml.password,
        auth=ml.auth,
        timeout=ml.timeout,
    )
