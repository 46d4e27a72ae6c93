"""Delimited text tokenizer for dataset import.

Splits CSV text into records of raw field strings following RFC 4180
quoting rules. Fields are returned verbatim: no trimming, no type
conversion.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
QUOTE = '"'

# ParseError kinds
UNTERMINATED_QUOTE = "unterminated quote"
MALFORMED_QUOTE = "malformed quote"
EMPTY_INPUT = "empty input"


class ParseError(Exception):
    """Raised when delimited text cannot be tokenized.

    Attributes:
        kind: Machine-checkable failure kind (e.g. "unterminated quote")
        line: 1-based line number where the problem starts, if known
    """

    def __init__(self, kind: str, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.line = line


def tokenize_csv(text: str, delimiter: str = DEFAULT_DELIMITER) -> list[list[str]]:
    """Tokenize delimited text into records.

    A field that opens with a quote may contain the delimiter and line
    breaks; a doubled quote inside it is a literal quote. A quote in the
    middle of an unquoted field is kept as-is. ``\\r\\n`` and ``\\n`` end
    a record, and a trailing line break does not produce an empty record.

    Args:
        text: Raw delimited text
        delimiter: Single-character field separator

    Returns:
        List of records, each a list of field strings

    Raises:
        ParseError: On a closing quote followed by anything other than a
            delimiter or line break, or on input ending inside a quoted field
    """
    records: list[list[str]] = []
    row: list[str] = []
    field: list[str] = []
    in_quotes = False
    field_was_quoted = False
    line = 1
    quote_line = 1
    length = len(text)
    i = 0

    while i < length:
        char = text[i]
        if in_quotes:
            if char == QUOTE:
                if i + 1 < length and text[i + 1] == QUOTE:
                    field.append(QUOTE)
                    i += 2
                    continue
                in_quotes = False
                following = text[i + 1] if i + 1 < length else ""
                if following not in ("", delimiter, "\n", "\r"):
                    raise ParseError(
                        MALFORMED_QUOTE,
                        f"Malformed CSV: unexpected {following!r} after closing quote on line {line}",
                        line=line,
                    )
            else:
                if char == "\n":
                    line += 1
                field.append(char)
        elif char == QUOTE and not field and not field_was_quoted:
            in_quotes = True
            field_was_quoted = True
            quote_line = line
        elif char == delimiter:
            row.append("".join(field))
            field = []
            field_was_quoted = False
        elif char == "\n":
            row.append("".join(field))
            records.append(row)
            row = []
            field = []
            field_was_quoted = False
            line += 1
        elif char != "\r":
            field.append(char)
        i += 1

    if in_quotes:
        raise ParseError(
            UNTERMINATED_QUOTE,
            f"Malformed CSV: unterminated quote starting on line {quote_line}",
            line=quote_line,
        )

    if row or field or field_was_quoted:
        row.append("".join(field))
        records.append(row)

    logger.debug(f"Tokenized {len(records)} records over {line} lines")
    return records
