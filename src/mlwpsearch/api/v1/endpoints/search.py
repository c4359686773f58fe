"""Search endpoint — One page of search results with paging links."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from mlwpsearch.api.deps import get_engine
from mlwpsearch.core.engine import SearchEngine
from mlwpsearch.core.pagination import build_facet_links
from mlwpsearch.models.response import SearchPageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/search",
    response_model=SearchPageResponse,
    summary="Search",
    description=(
        "Run a free-text search and return one page of results.\n\n"
        "The query text may be sent as `querytext` or as `s` (the key used in "
        "the generated paging links). Configured exclusion rules are appended "
        "to the query before it reaches MarkLogic."
    ),
    responses={
        422: {"description": "Validation error — start or pageLength is not a positive integer"},
        500: {"description": "Internal server error — search processing failed"},
    },
)
async def search(
    querytext: str | None = Query(default=None, description="Free-text query"),
    s: str | None = Query(default=None, description="Alias of querytext used by paging links"),
    start: int | None = Query(default=None, ge=1, description="1-based offset of the first result"),
    page_length: int | None = Query(default=None, ge=1, alias="pageLength", description="Page size"),
    engine: SearchEngine = Depends(get_engine),
) -> SearchPageResponse:
    """Search and return the page with next/previous links."""
    text = querytext if querytext is not None else (s or "")

    try:
        result, next_link, prev_link = await engine.search(text, start=start, page_length=page_length)
    except Exception as e:
        logger.error("Search failed: %s", e, exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Search processing failed: {e!s}",
        ) from e

    if result is None:
        return SearchPageResponse(status="no_query", querytext=text)

    return SearchPageResponse(
        status="completed" if result.total > 0 else "no_results",
        querytext=text,
        total=result.total,
        start=result.start,
        page_length=result.page_length,
        current_page=result.current_page,
        total_pages=result.total_pages,
        results=result.results,
        facet_links=build_facet_links(result, text.strip(), engine.settings.site.query_param),
        next_link=next_link,
        prev_link=prev_link,
    )
