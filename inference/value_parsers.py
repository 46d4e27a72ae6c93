"""Cell value parsers used by schema inference.

Each parser takes a raw cell string and returns the parsed value, or
None when the string does not conform. Parsers never raise on bad
input. ``TYPE_RULES`` lists them in the order inference tries them.
"""

import re
from datetime import date
from enum import Enum
from typing import Any, Callable, NamedTuple, Optional

CURRENCY_SYMBOLS = "$€£¥"
BOOLEAN_TRUE = frozenset({"true", "yes", "y"})
BOOLEAN_FALSE = frozenset({"false", "no", "n"})

_CURRENCY = re.compile(f"[{re.escape(CURRENCY_SYMBOLS)}]")
_DECIMAL = re.compile(r"^[-+]?\d*\.?\d+$")
# Optional time of day after a date: "T08:30", " 08:30:15.250Z", ...
_TIME_SUFFIX = r"(?:[T ]\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?"
_YEAR_FIRST = re.compile(r"^(\d{4})([-/])(\d{1,2})\2(\d{1,2})" + _TIME_SUFFIX + "$")
_YEAR_LAST = re.compile(r"^(\d{1,2})([-/])(\d{1,2})\2(\d{4})" + _TIME_SUFFIX + "$")


class InferredType(str, Enum):
    """Semantic types a column can be inferred as."""

    NUMBER = "number"
    DATE = "date"
    BOOL = "bool"
    STRING = "string"


def parse_number(raw: str) -> Optional[float]:
    """Parse a numeric cell, tolerating common display formats.

    ``(X)`` is negative X, a trailing ``%`` divides by 100, and currency
    symbols and thousands commas are ignored.

    >>> parse_number("$2,000")
    2000.0
    >>> parse_number("(3.50)")
    -3.5
    >>> parse_number("10%")
    0.1
    """
    cleaned = raw.strip()
    if not cleaned:
        return None

    negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        negative = True
        cleaned = cleaned[1:-1]

    percent = False
    if cleaned.endswith("%"):
        percent = True
        cleaned = cleaned[:-1]

    cleaned = _CURRENCY.sub("", cleaned).replace(",", "").strip()
    if not _DECIMAL.match(cleaned):
        return None

    value = float(cleaned)
    if percent:
        value /= 100
    if negative:
        value = -value
    return value


def parse_bool(raw: str) -> Optional[bool]:
    """Parse a boolean literal (true/false, yes/no, y/n), any case."""
    value = raw.strip().lower()
    if value in BOOLEAN_TRUE:
        return True
    if value in BOOLEAN_FALSE:
        return False
    return None


def parse_date(raw: str) -> Optional[date]:
    """Parse a calendar date in one of the accepted numeric shapes.

    Accepted: ``YYYY-MM-DD``, ``YYYY/MM/DD``, ``M/D/YYYY`` (``-`` also
    allowed as separator, zero padding optional), each optionally
    followed by a time of day. ``M/D/YYYY`` is read day-first when the
    first part cannot be a month.
    """
    value = raw.strip()
    if not value:
        return None

    match = _YEAR_FIRST.match(value)
    if match:
        return _build_date(int(match.group(1)), int(match.group(3)), int(match.group(4)))

    match = _YEAR_LAST.match(value)
    if match:
        first, second, year = int(match.group(1)), int(match.group(3)), int(match.group(4))
        if first > 12:
            return _build_date(year, second, first)
        return _build_date(year, first, second)

    return None


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


class TypeRule(NamedTuple):
    """A candidate column type and the parser deciding conformance."""

    type: InferredType
    parse: Callable[[str], Any]


# Inference order: the first rule the column conforms to wins
TYPE_RULES: tuple[TypeRule, ...] = (
    TypeRule(InferredType.BOOL, parse_bool),
    TypeRule(InferredType.NUMBER, parse_number),
    TypeRule(InferredType.DATE, parse_date),
)
