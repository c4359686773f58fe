"""Query and search request models.

A query is either free text or a structured query. The two shapes are
a tagged union discriminated on ``kind`` so that normalization can
dispatch explicitly instead of sniffing Python types.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field


class FreeTextQuery(BaseModel):
    """A free-text query, e.g. ``solar AND title:energy``."""

    kind: Literal["text"] = "text"
    text: str = Field(default="", description="Query text as typed by the user")


class StructuredQuery(BaseModel):
    """A structured query made of explicit filter terms.

    ``terms`` is serialized to JSON as-is and sent to MarkLogic as a
    structured query, so it should follow MarkLogic's structured query
    grammar (e.g. ``{"query": {"term-query": {"text": ["solar"]}}}``).
    """

    kind: Literal["structured"] = "structured"
    terms: dict[str, Any] | list[Any] = Field(default_factory=dict, description="Structured filter terms")


Query = Annotated[FreeTextQuery | StructuredQuery, Field(discriminator="kind")]


class NormalizedQuery(BaseModel):
    """Canonical query value ready for dispatch."""

    value: str = Field(description="Trimmed query text or serialized structured query")
    structured: bool = Field(default=False, description="True when value is a serialized structured query")

