"""Core query layer — normalization, exclusions, dispatch and paging."""

from mlwpsearch.core.dispatcher import SearchDispatcher
from mlwpsearch.core.engine import SearchEngine

__all__ = ["SearchDispatcher", "SearchEngine"]
