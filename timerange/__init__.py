"""
Timezone-aware half-open time ranges with union, difference and splitting.
"""

from .domain import (
    InvalidTimerangeError,
    InvalidTimezoneError,
    InvalidUnitError,
    Pair,
    SubtractionError,
    Timerange,
    TimerangeError,
    as_list,
)

__version__ = "1.0.0"

__all__ = [
    "Timerange",
    "Pair",
    "as_list",
    "TimerangeError",
    "InvalidTimerangeError",
    "InvalidTimezoneError",
    "InvalidUnitError",
    "SubtractionError",
    "__version__",
]
