"""mlwpsearch — MarkLogic search bridge for site search pages."""

__version__ = "0.1.0"
