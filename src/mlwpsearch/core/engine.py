"""Search engine — The search page flow, end to end.

    querytext + paging → [Dispatcher] → driver → SearchResults
                       → [Pagination] → (result, next_link, prev_link)

The flow has three outcomes:
  - no query (or no result from the driver) → (None, None, None)
  - a query with zero hits                  → (result, None, None)
  - a query with hits                       → (result, next or None, prev or None)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from mlwpsearch.core.dispatcher import ParamsHook, QueryHook, SearchDispatcher
from mlwpsearch.core.exclusions import Clock
from mlwpsearch.core.pagination import build_page_links
from mlwpsearch.drivers.base.registry import DriverRegistry
from mlwpsearch.models.query import Query
from mlwpsearch.models.result import SearchOutcome, SearchResults

if TYPE_CHECKING:
    from mlwpsearch.config.settings import Settings

logger = logging.getLogger(__name__)


def search_page_url(settings: Settings) -> str | None:
    """Return the URL the search page is served from, if there is one."""
    if settings.site.replace_search:
        return settings.site.home_url
    return settings.site.search_page_url or None


class SearchEngine:
    """Runs searches for the search page.

    Attributes:
        settings: Application configuration, read on every search.
        registry: Registry the driver is looked up in.
        dispatcher: Query building and driver dispatch.
    """

    def __init__(
        self,
        settings: Settings,
        registry: DriverRegistry,
        param_hooks: Sequence[ParamsHook] = (),
        query_hooks: Sequence[QueryHook] = (),
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings
        self.registry = registry
        self.dispatcher = SearchDispatcher(
            registry,
            options_provider=settings.get_options,
            driver_name=settings.search.driver,
            param_hooks=param_hooks,
            query_hooks=query_hooks,
            clock=clock,
        )

    async def shutdown(self) -> None:
        """Shut down every registered driver."""
        await self.registry.shutdown_all()
        logger.info("Search engine shut down")

    async def search(
        self,
        querytext: str,
        start: int | None = None,
        page_length: int | None = None,
    ) -> SearchOutcome:
        """Search for ``querytext`` and compute paging links.

        Args:
            querytext: Free-text query from the search form.
            start: 1-based offset requested by the page, if any.
            page_length: Page size requested by the page, if any.

        Returns:
            The ``(result, next_link, prev_link)`` outcome.
        """
        querytext = querytext.strip()
        if not querytext:
            return SearchOutcome()

        options = self.settings.get_options()
        results = await self.search_query(
            querytext,
            {
                "start": start if start is not None else 1,
                "pageLength": page_length if page_length is not None else self.settings.search.default_page_length,
                "options": options["rest_config_option"],
                "transform": options["rest_transform"],
            },
        )
        if results is None:
            return SearchOutcome()

        if results.total < 1:
            return SearchOutcome(result=results)

        next_link, prev_link = build_page_links(
            results,
            querytext,
            search_page_url(self.settings),
            query_param=self.settings.site.query_param,
        )
        logger.debug(
            "Page %d of %d for %r (%d hits)",
            results.current_page,
            results.total_pages,
            querytext,
            results.total,
        )
        return SearchOutcome(result=results, next_link=next_link, prev_link=prev_link)

    async def search_query(
        self,
        query: Query | str | Mapping[str, Any] | list[Any],
        params: Mapping[str, Any] | None = None,
    ) -> SearchResults | None:
        """Run a free-text or structured query without building links."""
        return await self.dispatcher.dispatch(query, params)
