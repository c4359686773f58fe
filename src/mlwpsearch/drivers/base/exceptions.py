"""Driver-specific exceptions."""


class DriverError(Exception):
    """Base exception for driver errors."""


class ConnectionError(DriverError):
    """Raised when the driver cannot reach the search backend."""


class QueryError(DriverError):
    """Raised when a search query fails."""


class ConfigurationError(DriverError):
    """Raised when driver configuration is invalid."""
