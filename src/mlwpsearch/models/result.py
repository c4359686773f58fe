"""Search result models — What a driver hands back and what a search yields.

``SearchResults`` mirrors the JSON body of MarkLogic's ``/v1/search``.
The query layer only relies on the paging accessors (``total``,
``current_page``, ``total_pages``, ``next_start``, ``previous_start``,
``page_length``); everything else is carried through for rendering.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """A single matching document."""

    index: int = Field(default=0, description="1-based position in the full result set")
    uri: str = Field(default="", description="Document URI")
    path: str | None = Field(default=None, description="XPath of the matching node")
    score: float = Field(default=0.0, description="Relevance score")
    confidence: float = Field(default=0.0, description="Normalized confidence")
    fitness: float = Field(default=0.0, description="Normalized fitness")
    href: str | None = Field(default=None, description="REST URL of the document")
    mimetype: str | None = Field(default=None, description="Document MIME type")
    format: str | None = Field(default=None, description="Document format (json, xml, text, binary)")
    matches: list[dict[str, Any]] = Field(default_factory=list, description="Snippet match fragments")
    extracted: dict[str, Any] | None = Field(default=None, description="Extracted metadata, if any")


class FacetValue(BaseModel):
    """One value of a facet with its frequency."""

    name: str = Field(description="Display name")
    count: int = Field(default=0, description="Number of matching documents")
    value: Any = Field(default=None, description="Raw value")


class SearchResults(BaseModel):
    """A page of search results with paging arithmetic."""

    total: int = Field(default=0, description="Total number of matching documents")
    start: int = Field(default=1, description="1-based offset of the first hit on this page")
    page_length: int = Field(default=10, description="Requested page size")
    results: list[SearchHit] = Field(default_factory=list, description="Hits on this page")
    facets: dict[str, list[FacetValue]] = Field(default_factory=dict, description="Facet name to values")
    qtext: str | None = Field(default=None, description="Query text echoed by the server")

    @classmethod
    def from_marklogic(cls, data: dict[str, Any]) -> SearchResults:
        """Build results from a ``/v1/search?format=json`` response body."""
        facets: dict[str, list[FacetValue]] = {}
        for name, facet in (data.get("facets") or {}).items():
            if not isinstance(facet, dict):
                continue
            facets[name] = [FacetValue(**fv) for fv in facet.get("facetValues", [])]

        qtext = data.get("qtext")
        if isinstance(qtext, list):
            qtext = " ".join(str(q) for q in qtext)

        return cls(
            total=int(data.get("total", 0)),
            start=int(data.get("start", 1)),
            page_length=int(data.get("page-length", 10)),
            results=[SearchHit(**hit) for hit in data.get("results", [])],
            facets=facets,
            qtext=qtext,
        )

    @property
    def current_page(self) -> int:
        if self.page_length < 1:
            return 1
        return math.ceil(self.start / self.page_length)

    @property
    def total_pages(self) -> int:
        if self.page_length < 1:
            return 0
        return math.ceil(self.total / self.page_length)

    @property
    def next_start(self) -> int:
        return self.start + self.page_length

    @property
    def previous_start(self) -> int:
        return max(1, self.start - self.page_length)


class SearchOutcome(BaseModel):
    """The ``(result, next_link, prev_link)`` triple returned by a search.

    All three are ``None`` when no search was performed.
    """

    result: SearchResults | None = None
    next_link: str | None = None
    prev_link: str | None = None

    def __iter__(self) -> Iterator[Any]:  # type: ignore[override]
        return iter((self.result, self.next_link, self.prev_link))

    @property
    def performed(self) -> bool:
        return self.result is not None
