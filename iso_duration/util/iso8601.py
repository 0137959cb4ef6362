"""
Convert between `Duration` and ISO 8601 duration strings.

Only the fixed length subset of the format is supported:
```
["-"] "P" [n "D"] ["T" [n "H"] [n "M"] [n ["." n] "S"]]
```
Years and months are rejected since their length depends on the calendar. A leading `-` marks a
negative duration. ISO 8601 doesn't define signed durations but the convention is widely
understood, and `format_duration` and `parse_duration` agree on it.
"""
from typing import Optional
from datetime import timedelta
import re

from ..models.duration import (
    Duration, NANOSECONDS_PER_SECOND, SECONDS_PER_DAY, SECONDS_PER_HOUR, SECONDS_PER_MINUTE,
    MIN_SECONDS, MAX_SECONDS,
)


class DurationParseError(ValueError):
    """ Base class for ISO 8601 durations that can't be decoded """

    reason = "Invalid ISO 8601 duration"

    def __init__(self, text: str, detail: str, fragment: Optional[str] = None, position: int = 0):
        self.text = text
        self.detail = detail
        self.fragment = text[position:] if fragment is None else fragment
        self.position = position
        super().__init__(str(self))

    def __str__(self):
        message = f"{self.reason} in {self.text!r}: {self.detail}"
        if self.fragment:
            message += f" ({self.fragment!r} at position {self.position})"
        return message


class MalformedInput(DurationParseError):
    """ The string doesn't match the duration grammar """
    reason = "Malformed ISO 8601 duration"


class UnsupportedUnit(DurationParseError):
    """ The string uses years or months, which don't have a fixed length """
    reason = "Calendar unit not supported"


class Overflow(DurationParseError):
    """ The value is too large for the target type """
    reason = "Duration out of range"


class InexactValue(DurationParseError):
    """ The value is more precise than the target type can store """
    reason = "Duration can't be represented exactly"


_COMPONENT = re.compile(r"(?P<value>[0-9]+)(?:\.(?P<fraction>[0-9]+))?(?P<unit>[A-Z])")

# Unit seconds for designators allowed before and after the "T"
_DATE_UNITS = {"D": SECONDS_PER_DAY}
_TIME_UNITS = {"H": SECONDS_PER_HOUR, "M": SECONDS_PER_MINUTE, "S": 1}
_CALENDAR_UNITS = {"Y": "years", "M": "months"}
_UNIT_ORDER = "DHMS"

# 2**63 seconds has 19 digits, anything with more significant digits overflows however it's scaled
_MAX_DIGITS = 20
_FRACTION_DIGITS = 9


def format_duration(duration: Duration) -> str:
    """
    Format a duration as a canonical ISO 8601 string, e.g. `P2DT3H30M15S`.

    Zero is `PT0S`. Components that are zero are left out, days are the largest unit, and
    fractional seconds use as few digits as needed.
    """
    total = duration.total_nanoseconds()
    if total == 0:
        return "PT0S"

    sign = "-" if total < 0 else ""
    seconds, nanoseconds = divmod(abs(total), NANOSECONDS_PER_SECOND)
    days, seconds = divmod(seconds, SECONDS_PER_DAY)
    hours, seconds = divmod(seconds, SECONDS_PER_HOUR)
    minutes, seconds = divmod(seconds, SECONDS_PER_MINUTE)

    date_part = f"{days}D" if days else ""

    time_part = ""
    if hours:
        time_part += f"{hours}H"
    if minutes:
        time_part += f"{minutes}M"
    if seconds or nanoseconds:
        time_part += str(seconds)
        if nanoseconds:
            time_part += "." + f"{nanoseconds:09d}".rstrip("0")
        time_part += "S"

    return f"{sign}P{date_part}" + (f"T{time_part}" if time_part else "")


def format_timedelta(delta: timedelta) -> str:
    return format_duration(Duration.from_timedelta(delta))


def _parse_fraction(text: str, match: re.Match) -> int:
    """ Returns the fraction of a seconds component in nanoseconds """
    fraction = match["fraction"]
    if fraction is None:
        return 0
    if fraction[_FRACTION_DIGITS:].strip("0"):
        raise InexactValue(text, "precision is limited to nanoseconds",
            fragment = match[0], position = match.start())
    return int(fraction[:_FRACTION_DIGITS].ljust(_FRACTION_DIGITS, "0"))


def parse_duration(text: str) -> Duration:
    """
    Parse an ISO 8601 duration string such as `P1DT2H30M` or `-PT1.5S`.

    Raises `MalformedInput` if the string doesn't match the grammar, `UnsupportedUnit` for year
    and month components, `InexactValue` for fractions finer than a nanosecond, and `Overflow` if
    the result doesn't fit in a `Duration`.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected an ISO 8601 duration string, got {type(text).__name__}")

    pos = 0
    negative = text.startswith("-")
    if negative:
        pos += 1

    if not text.startswith("P", pos):
        raise MalformedInput(text, "must start with 'P'", position = pos)
    pos += 1

    in_time_part = False
    last_unit = -1 # index into _UNIT_ORDER of the last component
    components = 0
    total_seconds = 0
    nanoseconds = 0

    while pos < len(text):
        if text[pos] == "T":
            if in_time_part:
                raise MalformedInput(text, "'T' can only appear once", position = pos)
            if pos + 1 == len(text):
                raise MalformedInput(text, "'T' must be followed by hours, minutes or seconds",
                    position = pos)
            in_time_part = True
            pos += 1
            continue

        match = _COMPONENT.match(text, pos)
        if not match:
            raise MalformedInput(text, "expected a number followed by a designator", position = pos)

        unit = match["unit"]
        if not in_time_part and unit in _CALENDAR_UNITS:
            raise UnsupportedUnit(text, f"{_CALENDAR_UNITS[unit]} have no fixed length",
                fragment = match[0], position = match.start())

        units = _TIME_UNITS if in_time_part else _DATE_UNITS
        if unit not in units:
            part = "time" if in_time_part else "date"
            raise MalformedInput(text, f"'{unit}' is not a valid designator in the {part} part",
                fragment = match[0], position = match.start())

        order = _UNIT_ORDER.index(unit)
        if order <= last_unit:
            raise MalformedInput(text, f"'{unit}' is repeated or out of order",
                fragment = match[0], position = match.start())
        last_unit = order

        if match["fraction"] is not None and unit != "S":
            raise MalformedInput(text, "only seconds can have a fractional part",
                fragment = match[0], position = match.start())

        # int() limits the digits it will convert, leading zeros included
        digits = match["value"].lstrip("0") or "0"
        if len(digits) > _MAX_DIGITS:
            raise Overflow(text, "too many digits", fragment = match[0], position = match.start())

        total_seconds += int(digits) * units[unit]
        if unit == "S":
            nanoseconds = _parse_fraction(text, match)

        components += 1
        pos = match.end()

    if components == 0:
        raise MalformedInput(text, "has no components", position = 0)

    total = total_seconds * NANOSECONDS_PER_SECOND + nanoseconds
    if negative:
        total = -total

    seconds, nanoseconds = divmod(total, NANOSECONDS_PER_SECOND)
    if not MIN_SECONDS <= seconds <= MAX_SECONDS:
        raise Overflow(text, f"magnitude exceeds {MAX_SECONDS} seconds", position = 0)

    return Duration(seconds, nanoseconds)


def parse_timedelta(text: str) -> timedelta:
    """
    Parse an ISO 8601 duration string into a `datetime.timedelta`.

    Raises the same errors as `parse_duration`, plus `InexactValue` for sub-microsecond fractions
    and `Overflow` for values outside timedelta's range.
    """
    duration = parse_duration(text)
    if duration.nanoseconds % 1_000:
        raise InexactValue(text, "timedelta precision is limited to microseconds", position = 0)
    try:
        return duration.to_timedelta()
    except OverflowError as e:
        raise Overflow(text, "magnitude exceeds the range of timedelta", position = 0) from e
