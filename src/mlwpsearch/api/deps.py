"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from mlwpsearch.core.engine import SearchEngine

# Engine instance for the running app (set during application lifespan)
_engine: SearchEngine | None = None


def set_engine(engine: SearchEngine | None) -> None:
    """Set the engine instance (called during app lifespan)."""
    global _engine
    _engine = engine


def get_engine() -> SearchEngine:
    """Get the search engine instance.

    Raises:
        RuntimeError: If the engine is not initialized.
    """
    if _engine is None:
        raise RuntimeError("Search engine not initialized. Is the server running?")
    return _engine
