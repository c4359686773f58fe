"""MarkLogic REST driver."""

from mlwpsearch.drivers.marklogic.driver import MarkLogicDriver, create_driver

__all__ = ["MarkLogicDriver", "create_driver"]
