"""
Timezone guessing and validation backed by pendulum's zone database.
"""

from __future__ import annotations

import logging
from typing import Callable

import pendulum

from .exceptions import InvalidTimezoneError

logger = logging.getLogger(__name__)

TimezoneGuesser = Callable[[], str]


def guess_timezone() -> str:
    """Return the IANA name of the host's local timezone."""
    name = pendulum.local_timezone().name
    logger.debug("Guessed local timezone %s", name)
    return name


def fixed_timezone(name: str) -> TimezoneGuesser:
    """
    Build a guesser that always answers ``name``.

    Handy for tests and for callers that want deterministic defaults without
    touching the host configuration.
    """
    validate_timezone(name)
    return lambda: name


def validate_timezone(name: str) -> str:
    """
    Ensure ``name`` is a timezone pendulum can resolve.

    Returns:
        The unchanged identifier

    Raises:
        InvalidTimezoneError: If the identifier is unknown
    """
    if not isinstance(name, str) or not name.strip():
        raise InvalidTimezoneError(f"Timezone must be a non-empty string, got {name!r}")

    try:
        pendulum.timezone(name)
    except (ValueError, KeyError) as exc:
        raise InvalidTimezoneError(f"Unknown timezone: '{name}'") from exc

    return name
