"""Helper utility functions."""

import math
import re
from datetime import datetime, timezone
from typing import Any, Optional, Union

INVALID_DATE = "Invalid Date"

_WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")

# Tried in order after ISO 8601
_DATE_FORMATS = (
    "%a %b %d %Y",
    "%a %b %d %Y %H:%M:%S",
    "%b %d %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%a, %d %b %Y %H:%M:%S GMT",
    "%m/%d/%Y",
    "%Y/%m/%d",
)


def to_number(value: Any) -> Optional[Union[int, float]]:
    """Coerce form or JSON input to a number.

    Integral values come back as ``int``. Blank strings are ``0`` and anything
    that is not a number is ``None``, since JSON cannot carry NaN.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _HEX_RE.match(text):
            return int(text, 16)
        if not _NUMBER_RE.match(text):
            return None
        number = float(text)
    else:
        return None

    if isinstance(number, float):
        if math.isnan(number) or math.isinf(number):
            return None
        if number.is_integer():
            return int(number)
    return number


def to_limit(value: Any) -> Optional[int]:
    """Turn a ``limit`` query value into a slice bound, or None when absent."""
    if value is None or value == "":
        return None
    number = to_number(value)
    if number is None:
        return 0
    return int(number)


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse a date string into a naive datetime, or None if unparsable.

    Timezone-aware input is converted to UTC before the zone is dropped.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None
    if parsed is None:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_date(value: Optional[datetime]) -> str:
    """Format like ``Mon Jan 01 1990``; None gives ``Invalid Date``."""
    if value is None:
        return INVALID_DATE
    return f"{_WEEKDAYS[value.weekday()]} {_MONTHS[value.month - 1]} {value.day:02d} {value.year:04d}"


def normalize_date(value: Optional[str], today: Optional[datetime] = None) -> str:
    """Format an optional request date, defaulting to today."""
    if not value:
        return format_date(today or datetime.now())
    return format_date(parse_date(value))
