"""Tests for paging and facet link construction."""

from __future__ import annotations

from urllib.parse import parse_qs, quote_plus, urlsplit

import pytest
from conftest import make_results

from mlwpsearch.core.pagination import (
    add_query_args,
    build_facet_links,
    build_facet_url_query,
    build_page_links,
)
from mlwpsearch.models.result import FacetValue, SearchResults

SEARCH_URL = "https://example.com/search/"


def _args(link: str) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(urlsplit(link).query).items()}


class TestAddQueryArgs:
    def test_appends_to_bare_url(self) -> None:
        assert add_query_args({"start": 11}, SEARCH_URL) == "https://example.com/search/?start=11"

    def test_replaces_existing_keys_and_keeps_others(self) -> None:
        link = add_query_args({"start": 11}, "https://example.com/?page_id=4&start=1")
        assert _args(link) == {"page_id": "4", "start": "11"}

    def test_no_url_gives_relative_link(self) -> None:
        assert add_query_args({"s": "solar power"}, None) == "?s=solar+power"

    def test_keeps_fragment(self) -> None:
        assert add_query_args({"start": 2}, "https://example.com/search#results").endswith("?start=2#results")


class TestBuildPageLinks:
    def test_zero_total_has_no_links(self) -> None:
        # Page fields claim more pages, but total wins
        results = SearchResults(total=0, start=11, page_length=10)
        assert build_page_links(results, "solar", SEARCH_URL) == (None, None)

    def test_first_page_has_only_next(self) -> None:
        next_link, prev_link = build_page_links(make_results(total=25, start=1), "solar power", SEARCH_URL)

        assert prev_link is None
        assert next_link is not None
        assert next_link.startswith(SEARCH_URL + "?")
        assert "start=11" in next_link
        assert quote_plus("solar power") in next_link
        assert _args(next_link) == {"s": "solar power", "start": "11", "pageLength": "10"}

    def test_middle_page_has_both(self) -> None:
        next_link, prev_link = build_page_links(make_results(total=25, start=11), "solar", SEARCH_URL)

        assert next_link is not None and prev_link is not None
        assert _args(next_link)["start"] == "21"
        assert _args(prev_link) == {"s": "solar", "start": "1", "pageLength": "10"}

    def test_last_page_has_only_prev(self) -> None:
        results = make_results(total=25, start=21)
        assert results.current_page == results.total_pages == 3

        next_link, prev_link = build_page_links(results, "solar", SEARCH_URL)

        assert next_link is None
        assert prev_link is not None
        assert _args(prev_link)["start"] == "11"

    def test_single_page_has_no_links(self) -> None:
        assert build_page_links(make_results(total=7), "solar", SEARCH_URL) == (None, None)

    def test_exactly_full_pages(self) -> None:
        results = make_results(total=20, start=11)
        assert results.total_pages == 2
        next_link, prev_link = build_page_links(results, "solar", SEARCH_URL)
        assert next_link is None
        assert prev_link is not None

    def test_page_length_carried_over(self) -> None:
        next_link, _ = build_page_links(make_results(total=25, start=1, page_length=5), "solar", SEARCH_URL)
        assert next_link is not None
        assert _args(next_link)["pageLength"] == "5"
        assert _args(next_link)["start"] == "6"

    def test_custom_query_param(self) -> None:
        next_link, _ = build_page_links(make_results(total=25), "solar", SEARCH_URL, query_param="querytext")
        assert next_link is not None
        assert _args(next_link)["querytext"] == "solar"

    def test_query_text_is_url_encoded(self) -> None:
        next_link, _ = build_page_links(make_results(total=25), 'a&b "c"', None)
        assert next_link is not None
        assert next_link.startswith("?s=a%26b+%22c%22")


class TestPagingArithmetic:
    @pytest.mark.parametrize(
        ("start", "page_length", "current"),
        [(1, 10, 1), (10, 10, 1), (11, 10, 2), (21, 10, 3), (6, 5, 2)],
    )
    def test_current_page(self, start: int, page_length: int, current: int) -> None:
        assert SearchResults(total=100, start=start, page_length=page_length).current_page == current

    def test_previous_start_never_below_one(self) -> None:
        assert SearchResults(total=100, start=3, page_length=10).previous_start == 1


class TestFacetLinks:
    def test_adds_constraint(self) -> None:
        assert build_facet_url_query("solar", "category:news") == "?s=" + quote_plus("solar AND category:news")

    def test_removes_existing_constraint(self) -> None:
        assert build_facet_url_query("solar AND category:news", "category:blog") == "?s=solar"

    def test_and_match_is_case_insensitive(self) -> None:
        assert build_facet_url_query("solar and category:news", "x:y") == "?s=solar"

    def test_build_facet_links(self) -> None:
        results = SearchResults(
            total=3,
            facets={"category": [FacetValue(name="news", count=2), FacetValue(name="press release", count=1)]},
        )
        links = build_facet_links(results, "solar")

        assert links["category"]["news"] == "?s=" + quote_plus("solar AND category:news")
        assert links["category"]["press release"] == "?s=" + quote_plus('solar AND category:"press release"')
