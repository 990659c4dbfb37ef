"""Cell value interpretation.

Row data is never coerced when a column's type changes, so every read
interprets the stored value against the column's *current* type. These
functions are that interpretation: stringification for text comparisons,
numeric and timestamp coercion, emptiness, and the per-type sort key.
"""

import math
import re
import unicodedata
from datetime import datetime, timezone
from typing import Any

from gridbase.domain.entities import CellValue, ColumnType

MISSING: Any = object()
"""Marker for a key absent from row data, read as NaN by ``to_number``."""

_DECIMAL = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_RADIX = re.compile(r"0(?:[xX](?P<hex>[0-9a-fA-F]+)|[oO](?P<oct>[0-7]+)|[bB](?P<bin>[01]+))")
# Whitespace JavaScript trims before reading a number
_WHITESPACE = (
    " \t\n\v\f\r\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008"
    "\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def is_empty(value: CellValue) -> bool:
    """A cell is empty when it is missing, null or the empty string."""
    return value is None or value == ""


def stringify(value: CellValue) -> str:
    """Render a cell value as text.

    Missing and null become ``""``; booleans are ``"true"``/``"false"``;
    integral floats drop their fractional part (``3.0`` -> ``"3"``).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def to_number(value: Any) -> float:
    """Numeric interpretation of a cell or filter value.

    Follows JavaScript's ``Number()``: null, ``""`` and blank strings read
    as 0, booleans as 1/0, and strings must be a full decimal literal,
    ``Infinity``, or a ``0x``/``0o``/``0b`` integer. A missing key
    (``MISSING``) and anything else without a numeric reading is NaN, so
    numeric comparisons against it are false.
    """
    if value is MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.nan
    if isinstance(value, str):
        return _parse_number(value.strip(_WHITESPACE))
    return math.nan


def _parse_number(text: str) -> float:
    if not text:
        return 0.0
    if _DECIMAL.fullmatch(text):
        # float() reads "Infinity" and overflows to inf like JavaScript
        return float(text)
    radix = _RADIX.fullmatch(text)
    if radix is None:
        return math.nan
    digits, base = next(
        (radix.group(name), base)
        for name, base in (("hex", 16), ("oct", 8), ("bin", 2))
        if radix.group(name)
    )
    try:
        return float(int(digits, base))
    except OverflowError:
        return math.inf


def to_timestamp(value: CellValue) -> float:
    """Parse an ISO 8601 date or datetime to a POSIX timestamp.

    Naive values are taken as UTC. Unparsable values map to 0 (the epoch).
    """
    if not isinstance(value, str) or not value.strip():
        return 0.0
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def collation_key(text: str) -> tuple[str, str, str]:
    """Approximate locale-aware ordering.

    Primary: accents stripped and case folded. Ties break on the case
    folded text and finally on the raw text so the order is total.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), text.casefold(), text)


def sort_key(value: CellValue, column_type: ColumnType) -> Any:
    """Comparable key for a cell under a column type.

    number: numeric, missing/NaN as 0. date: timestamp, unparsable as 0.
    text, select, checkbox: collation key of the stringified value.
    """
    if column_type == ColumnType.NUMBER:
        number = to_number(value)
        return 0.0 if math.isnan(number) else number
    if column_type == ColumnType.DATE:
        return to_timestamp(value)
    if column_type in (ColumnType.TEXT, ColumnType.SELECT, ColumnType.CHECKBOX):
        return collation_key(stringify(value))
    raise ValueError(f"Unhandled column type: {column_type!r}")
