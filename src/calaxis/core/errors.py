class CalaxisError(Exception):
    """Base error."""

class OutOfRangeError(CalaxisError, ValueError):
    """Raised when a day count or date tuple lies outside the coverage of a calendar system."""

class InvalidDateError(CalaxisError, ValueError):
    """Raised when a date tuple is not valid in its calendar (e.g. day 31 in a 30-day month)."""

class DataFormatError(CalaxisError):
    """Raised when calendar resource data is missing, malformed or inconsistent."""

class UnsupportedModificationError(CalaxisError, ValueError):
    """Raised when a derived (read-only) attribute is set to a value other than its computed one."""

class ConstructionConflictError(CalaxisError, ValueError):
    """Raised when composed new-year rules claim the same validity boundary."""

class InvalidVariantError(CalaxisError, ValueError):
    """Raised when a variant name carries a malformed or out-of-range day adjustment."""
