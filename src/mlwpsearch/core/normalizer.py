"""Query normalization — Turn raw input into a canonical, dispatchable query."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from mlwpsearch.models.query import FreeTextQuery, NormalizedQuery, Query, StructuredQuery


def as_query(raw: Query | str | Mapping[str, Any] | list[Any]) -> Query:
    """Wrap a raw string, mapping or list in the matching ``Query`` variant."""
    if isinstance(raw, (FreeTextQuery, StructuredQuery)):
        return raw
    if isinstance(raw, str):
        return FreeTextQuery(text=raw)
    if isinstance(raw, Mapping):
        return StructuredQuery(terms=dict(raw))
    if isinstance(raw, list):
        return StructuredQuery(terms=raw)
    raise TypeError(f"Unsupported query type: {type(raw).__name__}")


def normalize_query(query: Query) -> NormalizedQuery | None:
    """Return the canonical form of ``query``, or None if there is nothing to search.

    Free text is trimmed. Structured terms are serialized to compact JSON.
    """
    if isinstance(query, FreeTextQuery):
        text = query.text.strip()
        if not text:
            return None
        return NormalizedQuery(value=text, structured=False)

    if not query.terms:
        return None
    return NormalizedQuery(
        value=json.dumps(query.terms, separators=(",", ":"), ensure_ascii=False),
        structured=True,
    )
