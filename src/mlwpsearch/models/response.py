"""Search page response model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from mlwpsearch.models.result import SearchHit


class SearchPageResponse(BaseModel):
    """What the search page needs to render one page of results.

    ``status`` is one of:
      - ``no_query``: nothing was searched (empty query, no driver, or backend failure)
      - ``no_results``: the search ran and matched nothing
      - ``completed``: the search ran and matched at least one document
    """

    status: str = Field(description="no_query, no_results or completed")
    querytext: str = Field(default="", description="Query text as received")
    total: int = Field(default=0, description="Total number of matching documents")
    start: int = Field(default=1, description="1-based offset of the first hit on this page")
    page_length: int = Field(default=0, description="Page size")
    current_page: int = Field(default=0, description="1-based current page")
    total_pages: int = Field(default=0, description="Number of pages")
    results: list[SearchHit] = Field(default_factory=list, description="Hits on this page")
    facet_links: dict[str, dict[str, str]] = Field(
        default_factory=dict,
        description="Facet name to {value: link} for applying or clearing a facet",
    )
    next_link: str | None = Field(default=None, description="Link to the next page")
    prev_link: str | None = Field(default=None, description="Link to the previous page")
