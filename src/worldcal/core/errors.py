class WorldcalError(Exception):
    """Base error."""

class SchemaError(WorldcalError, ValueError):
    """Raised when a calendar schema cannot be built from the supplied data."""

class UnknownCalendarError(WorldcalError, KeyError):
    """Raised when a calendar name is not present in the registry."""
