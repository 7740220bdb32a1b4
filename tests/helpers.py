"""
Shared dates and assertions for the timerange tests.
"""

import pendulum

from timerange.domain.models import Timerange

BERLIN = "Europe/Berlin"
NEW_YORK = "America/New_York"

JULY_4 = "2018-07-04 13:00"
JULY_12 = "2018-07-12 15:00"
JULY_14 = "2018-07-14 18:00"
JULY_18 = "2018-07-18 09:00"


def at(value: str, tz: str = BERLIN) -> pendulum.DateTime:
    """Parse a wall-clock date-time in ``tz``."""
    return pendulum.parse(value, tz=tz)


def just_before(value: str, tz: str = BERLIN) -> pendulum.DateTime:
    """Last millisecond before ``value``."""
    return at(value, tz).subtract(microseconds=1000)


def assert_range(timerange, start, end, timezone: str = BERLIN) -> None:
    """Check type, bounds and timezone of a timerange."""
    assert isinstance(timerange, Timerange)
    assert isinstance(timerange.start, pendulum.DateTime)
    assert isinstance(timerange.end, pendulum.DateTime)
    assert timerange.start == start
    assert timerange.end == end
    assert timerange.timezone == timezone
