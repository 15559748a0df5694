"""Request value coercion helpers."""
import math
import re
from datetime import date, datetime
from typing import Any, Optional

_INT_PREFIX = re.compile(r'^\s*([+-]?\d+)')


def to_int(value: Any, default: int = 0) -> int:
    """
    Lenient integer coercion for request values.

    Leading digits win ("12abc" -> 12); anything without them becomes
    `default`, as do NaN and infinite floats. Range checks are left to the
    caller.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    match = _INT_PREFIX.match(str(value))
    return int(match.group(1)) if match else default


def has_non_finite(value: Any) -> bool:
    """True when a decoded JSON value holds NaN or an infinity anywhere."""
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(has_non_finite(item) for item in value.values())
    if isinstance(value, list):
        return any(has_non_finite(item) for item in value)
    return False


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date (or datetime) string; None when empty or malformed."""
    if not value or not isinstance(value, str):
        return None
    value = value.strip()
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None
