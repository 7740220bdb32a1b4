"""
Domain model for timezone-aware time ranges.

A ``Timerange`` is created from a half-open input ``[start, end)`` and stored
as a closed interval at millisecond resolution: ``09:00 - 12:00`` becomes
``09:00:00.000 - 11:59:59.999``. Every comparison below is a plain closed
interval comparison on those stored bounds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key
from typing import Iterable, List, NamedTuple, Tuple, Union

import pendulum
from pendulum import DateTime

from .exceptions import InvalidTimerangeError, InvalidUnitError, SubtractionError
from .timezones import TimezoneGuesser, guess_timezone, validate_timezone
from .units import normalize_unit, one_millisecond_after, one_millisecond_before, shift

logger = logging.getLogger(__name__)

Endpoint = Union[DateTime, datetime, str, int, None]

DISPLAY_FORMAT = "YYYY-MM-DD HH:mm:ss.SSS"


class Pair(NamedTuple):
    """Two disjoint timeranges, the earlier one first."""
    first: "Timerange"
    second: "Timerange"


AddResult = Union["Timerange", Pair]
SubtractResult = Union["Timerange", Pair, Tuple[()]]


def as_list(result: Union["Timerange", Pair, Tuple[()]]) -> List["Timerange"]:
    """Flatten any ``add``/``subtract`` result into a list of timeranges."""
    if isinstance(result, Timerange):
        return [result]
    return list(result)


def _to_instant(value: Endpoint, timezone: str) -> DateTime:
    """
    Convert an endpoint into a fresh pendulum instant expressed in ``timezone``.

    Naive values are read as wall-clock time in ``timezone``; aware values are
    converted. Integers are epoch milliseconds. Sub-millisecond precision is
    dropped.
    """
    if isinstance(value, datetime):
        instant = pendulum.instance(value, tz=timezone)
    elif isinstance(value, str):
        try:
            parsed = pendulum.parse(value, tz=timezone)
        except ValueError as exc:
            raise InvalidTimerangeError(f"Cannot parse date-time '{value}': {exc}") from exc

        if isinstance(parsed, DateTime):
            instant = parsed
        elif isinstance(parsed, pendulum.Date):
            instant = pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=timezone)
        else:
            raise InvalidTimerangeError(f"'{value}' does not describe a date-time")
    elif isinstance(value, int) and not isinstance(value, bool):
        seconds, millis = divmod(value, 1000)
        instant = pendulum.from_timestamp(seconds, tz=timezone).add(microseconds=millis * 1000)
    else:
        raise InvalidTimerangeError(
            f"Unsupported endpoint type {type(value).__name__}: {value!r}"
        )

    instant = instant.in_timezone(timezone)
    return instant.subtract(microseconds=instant.microsecond % 1000)


def _normalize(
    start: Endpoint,
    end: Endpoint,
    timezone: str,
    *,
    exclusive_end: bool,
) -> Tuple[DateTime, DateTime]:
    """
    Turn two endpoints into the closed bounds stored by a ``Timerange``.

    With ``exclusive_end`` the end is read as the first excluded instant and
    pulled back by one millisecond, unless it already sits on a ``.999``
    millisecond or coincides with the start. Bounds produced by the algebra
    below are already closed and skip that step.
    """
    start_instant = _to_instant(start, timezone)
    end_instant = _to_instant(end, timezone)

    if (
        exclusive_end
        and end_instant.microsecond // 1000 != 999
        and end_instant != start_instant
    ):
        end_instant = one_millisecond_before(end_instant)

    if start_instant > end_instant:
        raise InvalidTimerangeError(
            f"Timerange start {start_instant} cannot be after end {end_instant}"
        )

    return start_instant, end_instant


@dataclass(frozen=True, init=False)
class Timerange:
    """
    Immutable, timezone-aware time range with closed millisecond bounds.

    Invariant: start <= end, both expressed in ``timezone``.
    """
    start: DateTime
    end: DateTime
    timezone: str

    def __init__(
        self,
        start: Endpoint = None,
        end: Endpoint = None,
        timezone: str | None = None,
        *,
        timezone_guesser: TimezoneGuesser = guess_timezone,
    ):
        """
        Create a timerange from a half-open ``[start, end)`` input.

        Args:
            start: Inclusive start. Defaults to now.
            end: Exclusive end. Defaults to one week after ``start``.
            timezone: IANA timezone of both bounds. Guessed when omitted.
            timezone_guesser: Callable used to guess the missing timezone

        Raises:
            InvalidTimerangeError: If an endpoint is unusable or start > end
            InvalidTimezoneError: If the timezone is unknown
        """
        timezone = validate_timezone(timezone or timezone_guesser())

        # A lone endpoint is always taken as the start
        given = start if start is not None else end
        start_instant = _to_instant(given, timezone) if given is not None else _to_instant(
            pendulum.now(timezone), timezone
        )

        if start is not None and end is not None:
            end_value: Endpoint = end
        else:
            end_value = start_instant.add(weeks=1)

        self._assign(start_instant, end_value, timezone, exclusive_end=True)

    @classmethod
    def _closed(cls, start: DateTime, end: DateTime, timezone: str) -> "Timerange":
        """Build a timerange from bounds that are already inclusive."""
        timerange = cls.__new__(cls)
        timerange._assign(start, end, timezone, exclusive_end=False)
        return timerange

    def _assign(
        self,
        start: Endpoint,
        end: Endpoint,
        timezone: str,
        *,
        exclusive_end: bool,
    ) -> None:
        start_instant, end_instant = _normalize(
            start, end, timezone, exclusive_end=exclusive_end
        )
        object.__setattr__(self, "start", start_instant)
        object.__setattr__(self, "end", end_instant)
        object.__setattr__(self, "timezone", timezone)

    # Relational predicates

    def is_same(self, other: "Timerange") -> bool:
        """Both bounds are the same instants (timezones may differ)."""
        return self.start == other.start and self.end == other.end

    def contains(self, other: "Timerange") -> bool:
        """True if ``other`` lies within this range, bounds included."""
        return self.start <= other.start and self.end >= other.end

    def strictly_contains(self, other: "Timerange") -> bool:
        """Like ``contains`` but a shared bound disqualifies."""
        return self.start < other.start and self.end > other.end

    def overlaps(self, other: "Timerange") -> bool:
        """
        Check whether the two ranges genuinely intersect.

        Ranges that only touch at a boundary do not overlap.
        """
        first, second = Timerange.ordered([self, other])
        return first.end > second.start

    def is_before(self, other: "Timerange") -> bool:
        """Ordered by start, then by end. Equal ranges are not before each other."""
        if self.start == other.start:
            return self.end < other.end
        return self.start < other.start

    def is_after(self, other: "Timerange") -> bool:
        """Ordered by start, then by end. Equal ranges are not after each other."""
        if self.start == other.start:
            return self.end > other.end
        return self.start > other.start

    def is_adjacent(self, other: "Timerange") -> bool:
        """True if one range ends exactly where, or one millisecond before, the other starts."""
        return (
            self.end == other.start
            or self.end == one_millisecond_before(other.start)
            or self.start == other.end
            or one_millisecond_before(self.start) == other.end
        )

    # Combination

    def add(self, other: "Timerange") -> AddResult:
        """
        Union of two ranges.

        Overlapping or adjacent ranges merge into one ``Timerange`` carrying
        this range's timezone, whichever operand comes first. Disjoint ranges
        come back as an ascending ``Pair`` regardless of call order.
        """
        first, second = Timerange.ordered([self, other])

        if first.is_adjacent(second) or first.overlaps(second):
            return Timerange._closed(first.start, max(first.end, second.end), self.timezone)

        return Pair(first, second)

    def subtract(self, other: "Timerange") -> SubtractResult:
        """
        Remove ``other`` from this range.

        Returns:
            ``()`` if nothing remains, a single ``Timerange`` if one side
            remains, or a ``Pair`` when ``other`` cuts this range in two.
            Remainders carry this range's timezone.

        Raises:
            SubtractionError: If the ranges do not overlap or are merely adjacent
        """
        if not self.overlaps(other) or self.is_adjacent(other):
            logger.debug("Rejected subtraction of %s from %s", other, self)
            raise SubtractionError(
                f"Impossible to subtract these two timeranges: {self} and {other}"
            )

        if self.is_same(other) or other.contains(self):
            return ()

        left = None
        if self.start < other.start:
            left = Timerange._closed(self.start, one_millisecond_before(other.start), self.timezone)

        right = None
        if self.end > other.end:
            right = Timerange._closed(one_millisecond_after(other.end), self.end, self.timezone)

        if left is not None and right is not None:
            return Pair(left, right)
        if left is not None:
            return left
        return right

    def intersect(self, other: "Timerange") -> "Timerange | None":
        """
        Calculate the intersection of two time ranges.
        Returns None if there is no overlap.
        """
        if not self.overlaps(other):
            return None

        return Timerange._closed(
            max(self.start, other.start),
            min(self.end, other.end),
            self.timezone,
        )

    # Decomposition

    def split(
        self,
        step_size: int = 30,
        step_unit: str = "minute",
        drop_short_tail: bool = False,
        stride_size: int | None = None,
        stride_unit: str | None = None,
    ) -> List["Timerange"]:
        """
        Cut the range into consecutive pieces of ``step_size`` ``step_unit``.

        The cursor moves by ``stride_size`` ``stride_unit`` (defaulting to the
        step), so a shorter stride yields overlapping windows and a longer one
        leaves gaps. Pieces running past the end are clamped to it, or dropped
        when ``drop_short_tail`` is set.

        Raises:
            InvalidUnitError: For unknown units or non-positive sizes
        """
        if stride_size is None:
            stride_size = step_size
        if stride_unit is None:
            stride_unit = step_unit

        if step_size <= 0 or stride_size <= 0:
            raise InvalidUnitError(
                f"Step and stride must be positive, got {step_size} and {stride_size}"
            )
        normalize_unit(step_unit)
        normalize_unit(stride_unit)

        pieces: List[Timerange] = []
        cursor = self.start

        while cursor < self.end:
            piece_end = one_millisecond_before(shift(cursor, step_size, step_unit))

            surpassed = piece_end > self.end
            if surpassed:
                piece_end = self.end

            if not surpassed or not drop_short_tail:
                pieces.append(Timerange._closed(cursor, piece_end, self.timezone))

            cursor = shift(cursor, stride_size, stride_unit)

        logger.debug(
            "Split %s into %d piece(s) of %d %s",
            self, len(pieces), step_size, step_unit,
        )
        return pieces

    # Utilities

    def clone(self) -> "Timerange":
        """Independent copy, equal to this one under ``is_same``."""
        return Timerange._closed(self.start, self.end, self.timezone)

    def duration(self) -> pendulum.Duration:
        """
        Elapsed time between the stored bounds.

        The end is inclusive, so this is one millisecond shorter than the
        ``[start, end)`` span the range was created from.
        """
        return self.end - self.start

    def duration_minutes(self) -> int:
        """Return the length of the half-open span as given, in whole minutes."""
        return (one_millisecond_after(self.end) - self.start).in_minutes()

    def __str__(self) -> str:
        return f"{self.start.format(DISPLAY_FORMAT)} - {self.end.format(DISPLAY_FORMAT)}"

    # Ordering

    @staticmethod
    def compare_descending(first: "Timerange", second: "Timerange") -> int:
        """Comparator putting later ranges first."""
        if first.is_same(second):
            return 0
        if first.is_before(second):
            return 1
        return -1

    @staticmethod
    def compare_ascending(first: "Timerange", second: "Timerange") -> int:
        """Comparator putting earlier ranges first."""
        return -Timerange.compare_descending(first, second)

    @staticmethod
    def ordered(ranges: Iterable["Timerange"], descending: bool = False) -> List["Timerange"]:
        """Sort ranges with ``compare_ascending`` (or ``compare_descending``)."""
        comparator = Timerange.compare_descending if descending else Timerange.compare_ascending
        return sorted(ranges, key=cmp_to_key(comparator))
