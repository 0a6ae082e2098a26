from datetime import datetime, timezone
from typing import Any, Callable

from rulemap.core.errors import ConversionError
from rulemap.core.models.rules import PrimitiveKind


DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
"""
Wire timestamp: UTC, microsecond precision, literal "Z" suffix,
e.g. 2024-05-01T12:30:00.000000Z
"""

_TRUE = frozenset({"true", "1"})
_FALSE = frozenset({"false", "0", ""})


def _fail(value: Any, kind: str) -> ConversionError:
    return ConversionError(f"Unable to convert '{type(value).__name__}' value {value!r} to '{kind}'")


def to_int(value: Any) -> int:
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise _fail(value, "int")


def to_float(value: Any) -> float:
    try:
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            return float(value.strip())
    except (ValueError, OverflowError):
        pass
    raise _fail(value, "float")


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise _fail(value, "bool")


def to_string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise _fail(value, "string")


def to_array(value: Any) -> list | dict:
    if isinstance(value, dict):
        return value
    if isinstance(value, (list, tuple)):
        return list(value)
    raise _fail(value, "array")


CONVERTERS: dict[PrimitiveKind, Callable[[Any], Any]] = {
    PrimitiveKind.int: to_int,
    PrimitiveKind.float: to_float,
    PrimitiveKind.bool: to_bool,
    PrimitiveKind.string: to_string,
    PrimitiveKind.array: to_array,
}


def coerce(value: Any, kind: PrimitiveKind) -> Any:
    return CONVERTERS[kind](value)


def format_date(value: datetime) -> str:
    """
    Render a datetime as a wire timestamp. Aware values are converted
    to UTC first; naive values are taken as UTC already.
    """
    try:
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
    except (ValueError, OverflowError) as ex:
        raise ConversionError(f"Unable to format '{value!r}' as a timestamp") from ex

    # strftime does not pad years below 1000 on every platform
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}.{value.microsecond:06d}Z"
    )


def parse_date(value: Any) -> datetime:
    """Parse a wire timestamp into an aware UTC datetime."""
    if not isinstance(value, str):
        raise ConversionError(f"Unable to convert '{type(value).__name__}' to 'datetime'")
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError as ex:
        raise ConversionError(f"Unable to convert '{value}' to 'datetime'") from ex
    return parsed.replace(tzinfo=timezone.utc)
