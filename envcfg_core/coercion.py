"""Type Coercer.

Converts raw environment text into typed values. Malformed input always
raises CoercionError; absence is the binder's concern, never the coercer's.
"""

import math
import re
import struct
from typing import Any

from envcfg_core.errors import CoercionError
from envcfg_core.types import TypeTag

_SIGNED_LITERAL = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_LITERAL = re.compile(r"\+?[0-9]+")

_TRUE_LITERALS = frozenset({"true", "1"})
_FALSE_LITERALS = frozenset({"false", "0"})


def coerce(raw: str, type_tag: TypeTag) -> Any:
    """
    Coerce raw text to the Python value for a type tag.

    Args:
        raw: Variable value exactly as read from the environment
        type_tag: Target field type

    Returns:
        str for text/char, bool for bool, int for integer tags, float for float tags

    Raises:
        CoercionError: raw text is not a valid literal for the type
    """
    if type_tag is TypeTag.TEXT:
        return raw
    if type_tag is TypeTag.CHAR:
        return _coerce_char(raw)
    if type_tag is TypeTag.BOOL:
        return _coerce_bool(raw)
    if type_tag.is_integer:
        return _coerce_integer(raw, type_tag)
    if type_tag.is_float:
        return _coerce_float(raw, type_tag)
    raise CoercionError(raw, type_tag, "unsupported type")


def _coerce_char(raw: str) -> str:
    if len(raw) != 1:
        raise CoercionError(raw, TypeTag.CHAR, "expected exactly one character")
    return raw


def _coerce_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False
    raise CoercionError(raw, TypeTag.BOOL, "expected true, false, 1 or 0")


def _coerce_integer(raw: str, type_tag: TypeTag) -> int:
    # re.fullmatch with [0-9] keeps out whitespace, "_" separators and non-ASCII digits
    pattern = _SIGNED_LITERAL if type_tag.is_signed else _UNSIGNED_LITERAL
    if not pattern.fullmatch(raw):
        raise CoercionError(raw, type_tag, "invalid digit")

    low, high = type_tag.bounds
    # 128-bit bounds have at most 39 digits; longer literals overflow without parsing
    if len(raw.lstrip("+-").lstrip("0")) > 40:
        raise CoercionError(raw, type_tag, f"out of range [{low}, {high}]")

    value = int(raw)
    if value < low or value > high:
        raise CoercionError(raw, type_tag, f"out of range [{low}, {high}]")
    return value


def _coerce_float(raw: str, type_tag: TypeTag) -> float:
    if not raw.isascii() or raw != raw.strip() or "_" in raw:
        raise CoercionError(raw, type_tag, "invalid float literal")
    try:
        value = float(raw)
    except ValueError:
        raise CoercionError(raw, type_tag, "invalid float literal") from None

    if type_tag is TypeTag.F32 and math.isfinite(value):
        try:
            value = struct.unpack("f", struct.pack("f", value))[0]
        except OverflowError:
            value = math.copysign(math.inf, value)
    return value


def render_value(value: Any, type_tag: TypeTag) -> str:
    """Render a typed value as text that coerce() maps back to the same value."""
    if type_tag is TypeTag.BOOL:
        return "true" if value else "false"
    if type_tag.is_integer:
        return str(int(value))
    if type_tag.is_float:
        return repr(float(value))
    return str(value)
