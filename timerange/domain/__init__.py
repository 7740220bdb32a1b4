"""
Domain layer - the Timerange value object and its algebra.
"""

from .exceptions import (
    InvalidTimerangeError,
    InvalidTimezoneError,
    InvalidUnitError,
    SubtractionError,
    TimerangeError,
)
from .models import Pair, Timerange, as_list
from .timezones import fixed_timezone, guess_timezone, validate_timezone

__all__ = [
    "Timerange",
    "Pair",
    "as_list",
    "TimerangeError",
    "InvalidTimerangeError",
    "InvalidTimezoneError",
    "InvalidUnitError",
    "SubtractionError",
    "fixed_timezone",
    "guess_timezone",
    "validate_timezone",
]
