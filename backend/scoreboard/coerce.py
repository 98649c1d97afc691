from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Optional, Union

Number = Union[int, float]

_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _tidy(value: float) -> Number:
    if value.is_integer():
        return int(value)
    return value


def to_number(value: Any, fallback: Number = 0) -> Number:
    """Coerce a loosely typed JSON value to a finite number.

    Native numbers pass through when finite. Strings are read by their
    leading decimal prefix, so ``"12.5 pts"`` gives 12.5. Everything else,
    booleans included, gives ``fallback``. Whole floats come back as ``int``.
    """
    if isinstance(value, bool):
        return fallback
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _tidy(value) if math.isfinite(value) else fallback
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            return fallback
        try:
            parsed = float(match.group(1))
        except ValueError:
            return fallback
        return _tidy(parsed) if math.isfinite(parsed) else fallback
    return fallback


def lookup(value: Any, *path: Any, default: Any = None) -> Any:
    """Follow ``path`` through nested dicts/lists, returning ``default`` on any miss."""
    current = value
    for key in path:
        if isinstance(current, dict):
            if key not in current:
                return default
            current = current[key]
        elif isinstance(current, list) and isinstance(key, int):
            if not 0 <= key < len(current):
                return default
            current = current[key]
        else:
            return default
    return current


def first_key(value: Any) -> Optional[Any]:
    if isinstance(value, dict):
        return next(iter(value), None)
    if isinstance(value, list) and value:
        return 0
    return None


def is_truthy(value: Any) -> bool:
    # Containers count as present even when empty.
    if isinstance(value, (dict, list)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def display_string(value: Any) -> str:
    """String form used for names and grouping keys (``true``, ``7``, ``a,b``)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return str(_tidy(value))
    if isinstance(value, dict):
        return "[object Object]"
    if isinstance(value, list):
        return ",".join(display_string(item) for item in value)
    return str(value)


def char_code_sum(text: str) -> int:
    """Sum of the UTF-16 code units of ``text``."""
    data = text.encode("utf-16-le")
    return sum(int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2))


# Wide enough for any finite float, so quantize never overflows.
_FIXED_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def format_fixed(value: Any, places: int = 2) -> str:
    """Fixed-point string that rounds exact halves away from zero (1.125 -> "1.13")."""
    exact = Decimal(to_number(value))
    quantum = Decimal(1).scaleb(-places)
    return f"{exact.quantize(quantum, context=_FIXED_CONTEXT):f}"
