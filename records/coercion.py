"""
records/coercion.py

Tolerant scalar coercion for upstream record fields.

Upstream rows arrive already deserialized but untyped: numbers may be
strings, booleans may be ``"true"``, timestamps may be ISO strings with a
trailing ``Z``.  Every helper here returns ``None`` (or the supplied
default) instead of raising when a value cannot be interpreted.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

_TRUE_STRINGS = {"1", "true", "yes", "on", "t", "y"}
_FALSE_STRINGS = {"0", "false", "no", "off", "f", "n", ""}


def to_optional_str(value: Any) -> str | None:
    """Return *value* as a string, or ``None`` for ``None``."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


def to_optional_float(value: Any) -> float | None:
    """
    Coerce *value* to a finite float.

    Booleans, NaN, infinities and unparseable strings yield ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            number = float(stripped)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def to_optional_bool(value: Any) -> bool | None:
    """Coerce common truthy/falsy representations; unknown values yield ``None``."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def to_optional_datetime(value: Any) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware UTC-comparable datetime.

    Naive values are assumed to be UTC.  A trailing ``Z`` is accepted.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        if stripped.endswith(("Z", "z")):
            stripped = stripped[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(stripped)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed
