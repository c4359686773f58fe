"""Configuration management."""

from mlwpsearch.config.settings import Settings

__all__ = ["Settings"]
