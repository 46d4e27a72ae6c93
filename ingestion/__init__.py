"""Dataset import: tokenization, header sanitization and table normalization.

This package turns raw delimited text, row matrices, object rows or
dataset files into a normalized Table with import diagnostics.
"""

from .headers import SanitizedHeader, sanitize_field_id, sanitize_headers
from .importer import (
    build_table_from_object_rows,
    collect_dataset_warnings,
    parse_csv_text,
    parse_row_matrix,
)
from .loader import DatasetLoadError, dataframe_to_matrix, load_dataset, to_dataframe
from .table import Column, Table, cell_to_str
from .tokenizer import (
    EMPTY_INPUT,
    MALFORMED_QUOTE,
    UNTERMINATED_QUOTE,
    ParseError,
    tokenize_csv,
)

__all__ = [
    "Column",
    "Table",
    "cell_to_str",
    "SanitizedHeader",
    "sanitize_field_id",
    "sanitize_headers",
    "parse_csv_text",
    "parse_row_matrix",
    "build_table_from_object_rows",
    "collect_dataset_warnings",
    "load_dataset",
    "dataframe_to_matrix",
    "to_dataframe",
    "DatasetLoadError",
    "ParseError",
    "tokenize_csv",
    "EMPTY_INPUT",
    "MALFORMED_QUOTE",
    "UNTERMINATED_QUOTE",
]
