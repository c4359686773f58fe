"""Paging and facet links for the search page.

Links are plain URLs built on top of the search page URL; rendering them
is up to the view.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, quote_plus, urlencode, urlsplit, urlunsplit

from mlwpsearch.models.result import SearchResults

_AND_RE = re.compile(r"(.*)AND(.*)", re.IGNORECASE | re.DOTALL)


def add_query_args(args: Mapping[str, Any], url: str | None) -> str:
    """Set ``args`` on the query string of ``url``, replacing existing keys.

    With no URL, a relative ``?key=value`` link is returned.
    """
    scheme, netloc, path, query, fragment = urlsplit(url or "")
    pairs = [(k, v) for k, v in parse_qsl(query, keep_blank_values=True) if k not in args]
    pairs.extend((k, str(v)) for k, v in args.items())
    return urlunsplit((scheme, netloc, path, urlencode(pairs), fragment)) or "?"


def build_page_links(
    results: SearchResults,
    querytext: str,
    search_page_url: str | None,
    query_param: str = "s",
) -> tuple[str | None, str | None]:
    """Compute ``(next_link, prev_link)`` for a page of results.

    Args:
        results: The current page.
        querytext: The query text as the user typed it.
        search_page_url: Base URL of the search page.
        query_param: Query string key that carries the search text.

    Returns:
        The next and previous page links; either is None when there is no
        such page.
    """
    if results.total < 1:
        return None, None

    next_link = None
    if results.current_page < results.total_pages:
        next_link = add_query_args(
            {
                query_param: querytext,
                "start": results.next_start,
                "pageLength": results.page_length,
            },
            search_page_url,
        )

    prev_link = None
    if results.current_page > 1:
        prev_link = add_query_args(
            {
                query_param: querytext,
                "start": results.previous_start,
                "pageLength": results.page_length,
            },
            search_page_url,
        )

    return next_link, prev_link


def build_facet_url_query(querytext: str, constraint_query: str, query_param: str = "s") -> str:
    """Build the query string that toggles a facet constraint.

    A query that already carries an ``AND`` clause is treated as faceted,
    and the link drops everything from the last ``AND`` on. Otherwise the
    constraint is appended.
    """
    match = _AND_RE.match(querytext)
    if match:
        return f"?{query_param}={quote_plus(match.group(1).strip())}"
    return f"?{query_param}={quote_plus(f'{querytext} AND {constraint_query}')}"


def _constraint(facet: str, value: str) -> str:
    if re.search(r"\s", value):
        value = f'"{value}"'
    return f"{facet}:{value}"


def build_facet_links(results: SearchResults, querytext: str, query_param: str = "s") -> dict[str, dict[str, str]]:
    """Map each facet value to the link that applies (or removes) it."""
    return {
        facet: {
            fv.name: build_facet_url_query(querytext, _constraint(facet, fv.name), query_param)
            for fv in values
        }
        for facet, values in results.facets.items()
    }
