"""
Duration units understood by ``Timerange.split`` and helpers to shift instants.

Units follow the usual calendar-library spelling: singular, plural or a short
alias. Single-letter aliases are case-sensitive (``M`` is month, ``m`` minute).
"""

from typing import Dict

from pendulum import DateTime

from .exceptions import InvalidUnitError

# Short aliases, matched before lower-casing
_ALIASES: Dict[str, str] = {
    "y": "years",
    "M": "months",
    "w": "weeks",
    "d": "days",
    "h": "hours",
    "m": "minutes",
    "s": "seconds",
    "ms": "milliseconds",
}

_NAMES: Dict[str, str] = {
    "year": "years",
    "month": "months",
    "week": "weeks",
    "day": "days",
    "hour": "hours",
    "minute": "minutes",
    "second": "seconds",
    "millisecond": "milliseconds",
}


def normalize_unit(unit: str) -> str:
    """
    Resolve a unit name or alias to its canonical plural form.

    Args:
        unit: e.g. ``"minute"``, ``"minutes"``, ``"m"`` or ``"ms"``

    Returns:
        Canonical plural unit name such as ``"minutes"``

    Raises:
        InvalidUnitError: If the unit is not known
    """
    if unit in _ALIASES:
        return _ALIASES[unit]

    key = unit.strip().lower()
    if key in _NAMES:
        return _NAMES[key]
    if key.endswith("s") and key[:-1] in _NAMES:
        return _NAMES[key[:-1]]

    raise InvalidUnitError(
        f"Unknown duration unit: '{unit}'. "
        f"Use one of: {', '.join(sorted(_NAMES))}."
    )


def shift(instant: DateTime, amount: int, unit: str) -> DateTime:
    """Return ``instant`` moved by ``amount`` units (negative moves backwards)."""
    canonical = normalize_unit(unit)

    if canonical == "milliseconds":
        return instant.add(microseconds=amount * 1000)

    return instant.add(**{canonical: amount})


def one_millisecond_before(instant: DateTime) -> DateTime:
    """Last millisecond included by a closed range that ends right before ``instant``."""
    return instant.subtract(microseconds=1000)


def one_millisecond_after(instant: DateTime) -> DateTime:
    """First millisecond after a closed range ending at ``instant``."""
    return instant.add(microseconds=1000)
