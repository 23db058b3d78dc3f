"""
Value coercions matching the JavaScript semantics rule catalogs are authored for
"""
import math
import re
from typing import Any

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_PREFIXED_INT_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
# Number.prototype.toString switches to exponent notation from here
_EXPONENT_THRESHOLD = 1e21


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any) -> float:
    """
    Coerce a value the way JavaScript's Number() does.

    Anything that is not a recognisable number becomes NaN, which fails
    every comparison instead of raising.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _DECIMAL_RE.fullmatch(text):
            return float(text)
        if _PREFIXED_INT_RE.fullmatch(text):
            return float(int(text, 0))
        if text in ("Infinity", "+Infinity"):
            return math.inf
        if text == "-Infinity":
            return -math.inf
        return math.nan
    if isinstance(value, (list, tuple)):
        if not value:
            return 0.0
        if len(value) == 1:
            return to_number(to_js_string(value[0]))
    return math.nan


def to_js_string(value: Any) -> str:
    """Coerce a value the way JavaScript's String() does"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < _EXPONENT_THRESHOLD:
            return str(int(value))
        return repr(value)
    if isinstance(value, int) and abs(value) >= _EXPONENT_THRESHOLD:
        return to_js_string(float(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else to_js_string(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def strict_equals(left: Any, right: Any) -> bool:
    """JavaScript === for JSON-shaped values"""
    if _is_number(left) and _is_number(right):
        return left == right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if left is None or right is None:
        return left is None and right is None
    # objects and arrays compare by identity
    return left is right


def same_value_zero(left: Any, right: Any) -> bool:
    """Equality used by Array.prototype.includes (NaN matches NaN)"""
    if isinstance(left, float) and isinstance(right, float):
        if math.isnan(left) and math.isnan(right):
            return True
    return strict_equals(left, right)


def round_half_up(value: float) -> int:
    """Math.round: halves round towards positive infinity"""
    return int(math.floor(value + 0.5))
