""" A signed, nanosecond precision span of time """
from __future__ import annotations
from typing import ClassVar
from datetime import timedelta
import dataclasses

NANOSECONDS_PER_SECOND = 1_000_000_000
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR

MIN_SECONDS = -2**63
MAX_SECONDS = 2**63 - 1


@dataclasses.dataclass(frozen=True, order=True)
class Duration:
    """
    An elapsed span of time as whole seconds plus a sub-second nanosecond remainder.

    `seconds` is the floor of the value in seconds, so it carries the sign, and `nanoseconds` is
    always in `[0, 1e9)`. E.g. -1.5 seconds is `Duration(-2, 500_000_000)`. Because of that,
    comparing the fields in order compares the durations.

    Unlike `datetime.timedelta` this keeps nanoseconds and has a range of a signed 64 bit count of
    seconds.
    """

    seconds: int = 0
    """ Whole seconds, rounded towards negative infinity """

    nanoseconds: int = 0
    """ Non-negative sub-second remainder """

    ZERO: ClassVar[Duration]
    MIN: ClassVar[Duration]
    MAX: ClassVar[Duration]

    def __post_init__(self):
        for name in ("seconds", "nanoseconds"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"Duration {name} must be an int, got {type(value).__name__}")
        if not 0 <= self.nanoseconds < NANOSECONDS_PER_SECOND:
            raise ValueError(f"Duration nanoseconds must be in [0, 1e9), got {self.nanoseconds}")
        if not MIN_SECONDS <= self.seconds <= MAX_SECONDS:
            raise OverflowError(f"Duration of {self.seconds} seconds is out of range")

    @classmethod
    def from_nanoseconds(cls, total: int) -> Duration:
        seconds, nanoseconds = divmod(total, NANOSECONDS_PER_SECOND)
        return cls(seconds, nanoseconds)

    @classmethod
    def of(cls, *,
        days: int = 0, hours: int = 0, minutes: int = 0, seconds: int = 0,
        milliseconds: int = 0, microseconds: int = 0, nanoseconds: int = 0,
    ) -> Duration:
        """ Build a duration from a mix of units, e.g. `Duration.of(days=2, hours=3)` """
        total_seconds = days * SECONDS_PER_DAY + hours * SECONDS_PER_HOUR + \
            minutes * SECONDS_PER_MINUTE + seconds
        return cls.from_nanoseconds(
            total_seconds * NANOSECONDS_PER_SECOND +
            milliseconds * 1_000_000 + microseconds * 1_000 + nanoseconds
        )

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Duration:
        # timedelta is normalized so only days can be negative
        seconds = delta.days * SECONDS_PER_DAY + delta.seconds
        return cls(seconds, delta.microseconds * 1_000)

    @property
    def whole_seconds(self) -> int:
        """
        The `seconds` field, floored rather than truncated towards zero, e.g. -2 for -1.5
        seconds. Add `subsec_nanoseconds` to it to get the full value.
        """
        return self.seconds

    @property
    def subsec_nanoseconds(self) -> int:
        return self.nanoseconds

    def total_nanoseconds(self) -> int:
        return self.seconds * NANOSECONDS_PER_SECOND + self.nanoseconds

    def total_seconds(self) -> float:
        """ Total seconds as a float. May lose precision for large values. """
        return self.total_nanoseconds() / NANOSECONDS_PER_SECOND

    def is_negative(self) -> bool:
        return self.seconds < 0

    def to_timedelta(self) -> timedelta:
        """
        Convert to a `datetime.timedelta`.
        Raises ValueError if the duration has sub-microsecond precision, and OverflowError if it
        is outside timedelta's range.
        """
        microseconds, rest = divmod(self.nanoseconds, 1_000)
        if rest:
            raise ValueError(f"{self} has sub-microsecond precision and can't be a timedelta")
        return timedelta(seconds=self.seconds, microseconds=microseconds)

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration.from_nanoseconds(self.total_nanoseconds() + other.total_nanoseconds())

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration.from_nanoseconds(self.total_nanoseconds() - other.total_nanoseconds())

    def __neg__(self) -> Duration:
        return Duration.from_nanoseconds(-self.total_nanoseconds())

    def __abs__(self) -> Duration:
        return -self if self.is_negative() else self

    def __bool__(self) -> bool:
        return self.seconds != 0 or self.nanoseconds != 0


Duration.ZERO = Duration()
Duration.MIN = Duration(MIN_SECONDS, 0)
Duration.MAX = Duration(MAX_SECONDS, NANOSECONDS_PER_SECOND - 1)
