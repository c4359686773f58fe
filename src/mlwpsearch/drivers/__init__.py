"""Search driver layer — Pluggable connectors for search backends.

Built-in drivers:
  - marklogic: MarkLogic REST API (``/v1/search``)

Implement ``SearchDriver`` to connect your own search backend.
"""
