"""
Domain-specific exception hierarchy for the timerange library.
"""


class TimerangeError(Exception):
    """Base class for all library-level errors."""


class InvalidTimerangeError(TimerangeError, ValueError):
    """Raised when a timerange cannot be built from the given endpoints."""


class SubtractionError(TimerangeError, ValueError):
    """Raised when two timeranges share no time that could be removed."""


class InvalidUnitError(TimerangeError, ValueError):
    """Raised for unknown duration units or non-positive step sizes."""


class InvalidTimezoneError(TimerangeError, ValueError):
    """Raised when a timezone identifier cannot be resolved."""
