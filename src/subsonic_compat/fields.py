"""Decode-or-default field helpers.

Servers disagree on how they encode the same field: booleans arrive as JSON
booleans or strings, ids as strings or numbers, timestamps as ISO-8601
strings or Unix milliseconds, and single-item collections as a bare object.
Every decoder reads fields through these helpers so that a missing or
ill-typed value yields the field's default instead of an exception.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "1", "yes"})


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON booleans are never numbers here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_node(node: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return a child object, or an empty mapping when absent or not an object."""
    value = node.get(key)
    return value if isinstance(value, Mapping) else {}


def get_list(node: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    """Return a child collection as a list of objects.

    Args:
        node: Parent object
        key: Collection field name

    Returns:
        The array's object members in order. A single object is treated as a
        one-item collection; null, absent or scalar values give an empty list.

    Examples:
        >>> get_list({"artist": [{"id": "1"}, {"id": "2"}]}, "artist")
        [{'id': '1'}, {'id': '2'}]
        >>> get_list({"artist": {"id": "1"}}, "artist")
        [{'id': '1'}]
        >>> get_list({"artist": None}, "artist")
        []
    """
    value = node.get(key)
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, Mapping)]
    return []


def get_optional_str(node: Mapping[str, Any], key: str) -> Optional[str]:
    """Return a string field, or None when absent.

    Numeric values are converted to strings (some servers send numeric ids).
    """
    value = node.get(key)
    if isinstance(value, str):
        return value
    if _is_number(value):
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return None


def get_str(node: Mapping[str, Any], key: str, default: str = "") -> str:
    """Return a string field, or ``default`` when absent or ill-typed."""
    value = get_optional_str(node, key)
    return default if value is None else value


def get_optional_int(node: Mapping[str, Any], key: str) -> Optional[int]:
    """Return an integer field, or None when absent or not numeric.

    Examples:
        >>> get_optional_int({"year": "1979"}, "year")
        1979
        >>> get_optional_int({"year": 1979.0}, "year")
        1979
        >>> get_optional_int({"year": "unknown"}, "year") is None
        True
    """
    value = node.get(key)
    if _is_number(value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if math.isfinite(number) else None
    return None


def get_int(node: Mapping[str, Any], key: str, default: int = 0) -> int:
    """Return an integer field, or ``default`` (0) when absent or ill-typed."""
    value = get_optional_int(node, key)
    return default if value is None else value


def get_optional_float(node: Mapping[str, Any], key: str) -> Optional[float]:
    """Return a float field, or None when absent or not numeric."""
    value = node.get(key)
    if _is_number(value):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def get_float(node: Mapping[str, Any], key: str, default: float = 0.0) -> float:
    value = get_optional_float(node, key)
    return default if value is None else value


def to_bool(value: Any) -> bool:
    """Coerce a wire value to a boolean.

    JSON booleans are taken as-is. Strings are matched case-insensitively
    against true/false, 1/0 and yes/no. Numbers are true when non-zero.
    Anything else is False.

    Examples:
        >>> to_bool(True)
        True
        >>> to_bool("TRUE")
        True
        >>> to_bool("no")
        False
        >>> to_bool(1)
        True
        >>> to_bool("maybe")
        False
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        return text in _TRUE_STRINGS
    if _is_number(value):
        return value != 0
    return False


def get_bool(node: Mapping[str, Any], key: str) -> bool:
    """Return a boolean field, False when absent or unparseable."""
    return to_bool(node.get(key))


def _from_millis(millis: float) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def to_datetime(value: Any) -> Optional[datetime]:
    """Coerce a wire timestamp to an aware datetime.

    Strings are parsed as ISO-8601 first and as integer Unix milliseconds
    second. Numbers are Unix milliseconds. Naive ISO values are taken as UTC.

    Returns:
        datetime, or None if the value is absent or unparseable

    Examples:
        >>> to_datetime("2024-01-15T10:30:00Z").isoformat()
        '2024-01-15T10:30:00+00:00'
        >>> to_datetime(1705314600000).isoformat()
        '2024-01-15T10:30:00+00:00'
        >>> to_datetime("yesterday") is None
        True
    """
    if isinstance(value, bool) or value is None:
        return None

    if _is_number(value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return _from_millis(value)

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    parsed = None
    # isoparse accepts any character as the date/time separator, so a long
    # run of digits ("1710011200000") would otherwise read as a basic-format
    # date. Basic-format dates are at most 8 digits.
    if not (text.lstrip("-").isdigit() and len(text) > 8):
        try:
            parsed = date_parser.isoparse(text)
        except (ValueError, OverflowError):
            parsed = None

    if parsed is not None:
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    try:
        millis = int(text)
    except ValueError:
        logger.debug(f"Unparseable timestamp ignored: {text!r}")
        return None
    return _from_millis(millis)


def get_datetime(node: Mapping[str, Any], key: str) -> Optional[datetime]:
    """Return a timestamp field, or None when absent or unparseable."""
    return to_datetime(node.get(key))
