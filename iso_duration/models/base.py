""" Base model and the ISO 8601 duration field types """
from typing import Annotated as A, Any, Callable
from datetime import timedelta
from loguru import logger
from pydantic import (
    BaseModel as PydanticBaseModel, ConfigDict, PlainSerializer, PlainValidator, WithJsonSchema,
)

from .duration import Duration
from ..util.iso8601 import parse_duration, format_duration, parse_timedelta, format_timedelta
from ..config import get_settings


class BaseModel(PydanticBaseModel):
    model_config = ConfigDict(
        use_attribute_docstrings = True,
    )


def _to_duration(v: Any) -> Duration:
    return v if isinstance(v, Duration) else Duration.from_timedelta(v)


def _to_timedelta(v: Any) -> timedelta:
    if isinstance(v, timedelta):
        return v
    try:
        return v.to_timedelta()
    except OverflowError as e:
        # pydantic only reports ValueErrors as validation errors
        raise ValueError(str(e)) from e


def _duration_validator(parse: Callable[[str], Any], convert: Callable[[Any], Any]):
    """
    Returns a validator that parses ISO 8601 strings with `parse` and passes `Duration` and
    `timedelta` objects through `convert`. Anything else, such as numbers, is rejected.
    """
    def validate(v):
        try:
            if isinstance(v, str):
                return parse(v)
            elif isinstance(v, (Duration, timedelta)):
                return convert(v)
            else:
                raise ValueError(f"Expected an ISO 8601 duration string, got {type(v).__name__}")
        except ValueError as e:
            if get_settings().log_rejected_values:
                logger.warning(f"Rejected duration {v!r}: {e}")
            raise
    return validate


_validate_duration = _duration_validator(parse_duration, _to_duration)


def _validate_non_negative_duration(v):
    duration = _validate_duration(v)
    if duration.is_negative():
        raise ValueError(f"Duration {format_duration(duration)} must not be negative")
    return duration


IsoDuration = A[
    Duration,
    PlainValidator(_validate_duration),
    PlainSerializer(format_duration, return_type=str),
    WithJsonSchema({'type': 'string', 'format': 'duration'}),
]
"""
A `Duration` that is stored as an ISO 8601 duration string, e.g. `"P1DT2H30M"`.
Validation only accepts strings (or `Duration`/`timedelta` objects in python mode), serialization
always outputs the canonical string from `format_duration`.
"""


NonNegativeIsoDuration = A[
    Duration,
    PlainValidator(_validate_non_negative_duration),
    PlainSerializer(format_duration, return_type=str),
    WithJsonSchema({'type': 'string', 'format': 'duration'}),
]
""" IsoDuration that rejects negative values, e.g. for timeouts """


IsoTimedelta = A[
    timedelta,
    PlainValidator(_duration_validator(parse_timedelta, _to_timedelta)),
    PlainSerializer(format_timedelta, return_type=str),
    WithJsonSchema({'type': 'string', 'format': 'duration'}),
]
"""
Same as IsoDuration but for `datetime.timedelta`. Unlike pydantic's builtin timedelta handling it
doesn't accept numbers, and it serializes to the same canonical format as `IsoDuration`.
"""
