"""Base driver interface — Abstract classes for search backend drivers."""

from mlwpsearch.drivers.base.driver import DriverHealth, SearchDriver
from mlwpsearch.drivers.base.registry import DriverRegistry

__all__ = ["DriverHealth", "DriverRegistry", "SearchDriver"]
