"""Search dispatcher — From a raw query to a driver call.

Dispatch steps, in order:
  1. Normalize the query (empty input means no search)
  2. Append exclusion clauses (free text only; rules read fresh per call)
  3. Merge caller parameters over the defaults
  4. Run parameter hooks, then query hooks
  5. Sanitize the query value
  6. Call the configured driver

No step raises: a missing driver or a failing backend both yield None,
which callers treat the same as "no results".
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from mlwpsearch.core.exclusions import Clock, apply_exclusions, parse_rules
from mlwpsearch.core.normalizer import as_query, normalize_query
from mlwpsearch.core.sanitize import sanitize_query
from mlwpsearch.drivers.base.exceptions import DriverError
from mlwpsearch.drivers.base.registry import DriverRegistry
from mlwpsearch.models.query import Query
from mlwpsearch.models.result import SearchResults

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PARAMS: dict[str, Any] = {
    "start": 1,
    "pageLength": 10,
    "view": "all",
    "options": "",
    "transform": "",
}

# Receives the merged parameter map, returns the map to use.
ParamsHook = Callable[[dict[str, Any]], dict[str, Any]]

# Receives the query value and the final parameters, returns the query value to use.
QueryHook = Callable[[str, dict[str, Any]], str]

OptionsProvider = Callable[[], Mapping[str, Any]]


def merge_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Overlay caller-supplied parameters on ``DEFAULT_SEARCH_PARAMS``.

    Keys the defaults don't know about are kept.
    """
    merged = dict(DEFAULT_SEARCH_PARAMS)
    if params:
        merged.update(params)
    return merged


class SearchDispatcher:
    """Builds the final query and parameters and hands them to a driver.

    Args:
        registry: Registry to look the driver up in on each dispatch.
        options_provider: Returns the current option mapping; its
            ``search_exclude`` entry holds the exclusion rules.
        driver_name: Name of the driver to use.
        param_hooks: Parameter transformations, applied in order.
        query_hooks: Query value transformations, applied in order after
            the parameter hooks.
        clock: Clock used for ``{{today}}`` in exclusion rules.
    """

    def __init__(
        self,
        registry: DriverRegistry,
        options_provider: OptionsProvider,
        driver_name: str = "marklogic",
        param_hooks: Sequence[ParamsHook] = (),
        query_hooks: Sequence[QueryHook] = (),
        clock: Clock | None = None,
    ) -> None:
        self.registry = registry
        self.options_provider = options_provider
        self.driver_name = driver_name
        self.param_hooks: list[ParamsHook] = list(param_hooks)
        self.query_hooks: list[QueryHook] = list(query_hooks)
        self.clock = clock

    async def dispatch(
        self,
        query: Query | str | Mapping[str, Any] | list[Any],
        params: Mapping[str, Any] | None = None,
    ) -> SearchResults | None:
        """Search for ``query``.

        Args:
            query: Free text, a structured query, or a raw string/mapping/list.
            params: Partial search parameters; missing keys take defaults.

        Returns:
            The driver's results, or None when there is no query, an
            unsupported query type, no driver, or the driver call failed.
        """
        try:
            normalized = normalize_query(as_query(query))
        except TypeError as e:
            logger.debug("Query not dispatched: %s", e)
            return None
        if normalized is None:
            return None

        value = normalized.value
        if not normalized.structured:
            rules = parse_rules(self.options_provider().get("search_exclude"))
            value = apply_exclusions(value, rules, now=self.clock)

        final_params = merge_params(params)
        for params_hook in self.param_hooks:
            final_params = params_hook(final_params)

        for query_hook in self.query_hooks:
            value = query_hook(value, final_params)

        value = sanitize_query(value)

        driver = self.registry.get(self.driver_name)
        if driver is None:
            logger.warning("No search driver registered as '%s'", self.driver_name)
            return None

        try:
            return await driver.search(value, final_params, normalized.structured)
        except DriverError as e:
            logger.warning("Search failed on driver '%s': %s", self.driver_name, e)
            return None
