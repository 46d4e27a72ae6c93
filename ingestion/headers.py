"""Column header sanitization.

Turns raw header strings into unique, lowercase identifiers safe to use
as row keys and query field names.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

from ingestion.table import cell_to_str

logger = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class SanitizedHeader:
    """Result of sanitizing one header cell."""

    id: str
    original: str
    was_sanitized: bool


def sanitize_field_id(value: Any, index: int) -> str:
    """Sanitize a single header into a candidate id.

    The candidate is not yet unique; ``sanitize_headers`` resolves
    collisions.

    Args:
        value: Raw header cell
        index: 0-based column position, used for the blank-header fallback

    Returns:
        Lowercase id made of ``[a-z0-9_]``, never empty
    """
    cleaned = _NON_ALPHANUMERIC.sub("_", cell_to_str(value).strip().lower())
    cleaned = cleaned.strip("_")
    if not cleaned:
        cleaned = f"column_{index + 1}"
    return cleaned


def sanitize_headers(headers: Iterable[Any]) -> list[SanitizedHeader]:
    """Sanitize a header row into unique ids.

    Collisions, including ones created by sanitization itself, are
    resolved by suffixing ``_2``, ``_3``, ... in first-seen order.

    Args:
        headers: Raw header cells in column order

    Returns:
        One SanitizedHeader per input header, same order
    """
    used: set[str] = set()
    # candidate id -> next suffix to try
    next_suffix: dict[str, int] = {}
    result = []

    for index, header in enumerate(headers):
        original = cell_to_str(header)
        candidate = sanitize_field_id(original, index)
        unique = candidate
        if unique in used:
            counter = next_suffix.get(candidate, 2)
            unique = f"{candidate}_{counter}"
            while unique in used:
                counter += 1
                unique = f"{candidate}_{counter}"
            next_suffix[candidate] = counter + 1
            logger.debug(f"Header '{original}' collided, renamed to '{unique}'")
        used.add(unique)
        result.append(
            SanitizedHeader(id=unique, original=original, was_sanitized=original != unique)
        )

    return result
