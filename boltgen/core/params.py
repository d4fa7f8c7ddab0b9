"""
Value parsing utilities for untrusted request fields.
Every parser returns None when the raw value cannot be used; callers treat
None as "absent" and substitute the generation default.
"""
import math
import re
from typing import Any, Optional

from boltgen.core.types import HeadType, HEAD_TYPE_NAMES

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", ""})

# ISO 965 style classes: 6g, 6H, 4g6g, 5H6H
_TOLERANCE_CLASS_RE = re.compile(r"^(\d[a-hA-H]){1,2}$")


def parse_float(
    value: Any,
    min: Optional[float] = None,
    max: Optional[float] = None,
) -> Optional[float]:
    """
    Parse a numeric field. Zero, parse failures, non-finite values and values
    outside [min, max] all come back as None.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        v = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(v) or v == 0.0:
        return None
    if min is not None and v < min:
        return None
    if max is not None and v > max:
        return None
    return v


def parse_bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


def parse_head_type(value: Any) -> Optional[HeadType]:
    """Accepts the integer ID, a numeric string, or a profile name."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text in HEAD_TYPE_NAMES:
            return HEAD_TYPE_NAMES[text]
        try:
            value = int(text)
        except ValueError:
            return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    try:
        return HeadType(value)
    except (TypeError, ValueError):
        return None


def parse_tolerance_class(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not _TOLERANCE_CLASS_RE.match(text):
        return None
    return text


def clamp_if_bounds(
    value: float,
    min: Optional[float] = None,
    max: Optional[float] = None,
) -> float:
    """
    Clamp value to [min, max] when bounds are not None.
    If both are None, returns value unchanged.
    """
    v = float(value)
    if min is not None and v < min:
        return min
    if max is not None and v > max:
        return max
    return v
