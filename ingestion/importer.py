"""Dataset importer.

This module turns raw delimited text, a row matrix (header first) or a
list of object rows into a normalized Table with sanitized column ids
and import diagnostics. Cell values are kept as raw strings.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Sequence, Union

from ingestion.headers import sanitize_headers
from ingestion.table import Column, Table, cell_to_str
from ingestion.tokenizer import EMPTY_INPUT, ParseError, tokenize_csv
from options import ImportOptions, resolve_import_options
from utils.constants import LARGE_ROW_WARNING_COUNT

logger = logging.getLogger(__name__)

OptionsArg = Optional[Union[ImportOptions, Mapping[str, Any]]]


def parse_csv_text(text: str, options: OptionsArg = None) -> Table:
    """Parse CSV text into a normalized table.

    The first record is the header row. Options may be an ImportOptions,
    a mapping such as ``{"maxRows": 500, "previewRows": 5}``, or None.

    Args:
        text: Raw comma-delimited text
        options: Import options

    Returns:
        Normalized Table

    Raises:
        ParseError: If the text is empty or quoting is malformed
        OptionsValidationError: If options hold invalid values
    """
    import_options = resolve_import_options(options)
    if not text or not text.strip():
        raise ParseError(EMPTY_INPUT, "The file is empty.")

    logger.info(f"Parsing CSV text ({len(text)} characters)")
    records = tokenize_csv(text)
    return _normalize_table(records, import_options)


def parse_row_matrix(rows: Iterable[Sequence[Any]], options: OptionsArg = None) -> Table:
    """Normalize a matrix of rows (header first) into a table.

    Used for spreadsheet sheets and already-tokenized input. Non-string
    cells are converted to strings; rows of the wrong width are padded or
    cut to the header width and counted in ``inconsistent_row_count``.

    Args:
        rows: Ordered rows of cells; the first row is the header
        options: Import options

    Returns:
        Normalized Table
    """
    import_options = resolve_import_options(options)
    return _normalize_table([list(row) for row in rows], import_options)


def build_table_from_object_rows(
    rows: Optional[Iterable[Any]], options: OptionsArg = None
) -> Table:
    """Build a table from object rows, as returned by JSON APIs.

    Columns are the union of keys across retained rows, in first-seen
    order. Entries that are not mappings are ignored. Nested values are
    JSON-encoded.

    Args:
        rows: Sequence of row mappings
        options: Import options

    Returns:
        Normalized Table
    """
    import_options = resolve_import_options(options)
    object_rows = [row for row in (rows or []) if isinstance(row, Mapping)]
    if not object_rows:
        logger.warning("No object rows found in API payload")
        return Table(warnings=["No rows found in the API response."])

    raw_row_count = len(object_rows)
    truncated = _is_truncated(raw_row_count, import_options)
    retained = object_rows[: import_options.max_rows] if truncated else object_rows

    keys = list(dict.fromkeys(key for row in retained for key in row.keys()))
    headers = sanitize_headers(keys)
    columns = [
        Column(id=header.id, raw_header=header.original, label=header.original.strip() or header.id)
        for header in headers
    ]
    sanitized_headers = any(header.was_sanitized for header in headers)

    has_nested = False
    records = []
    for row in retained:
        record = {}
        for key, column in zip(keys, columns):
            value = row.get(key)
            if isinstance(value, (dict, list)):
                has_nested = True
            record[column.id] = cell_to_str(value)
        records.append(record)

    warnings = []
    if sanitized_headers:
        warnings.append("Some API fields were renamed to keep column names consistent.")
    if has_nested:
        warnings.append("Some API fields contained nested values and were stringified.")
    if truncated:
        warnings.append(f"Loaded the first {len(records)} rows to keep editing responsive.")
    if len(records) > LARGE_ROW_WARNING_COUNT:
        warnings.append(f"Large dataset loaded ({len(records)} rows). Editing may feel slower.")

    logger.info(
        f"Built table from {raw_row_count} object rows: "
        f"{len(records)} retained, {len(columns)} columns"
    )
    return Table(
        columns=columns,
        rows=records,
        preview=records[: import_options.preview_rows],
        warnings=warnings,
        row_count=len(records),
        raw_row_count=raw_row_count,
        truncated=truncated,
        sanitized_headers=sanitized_headers,
        expected_column_count=len(columns),
        inconsistent_row_count=0,
    )


def collect_dataset_warnings(table: Table) -> list[str]:
    """Collect display warnings for a normalized table.

    Args:
        table: Table produced by the importer

    Returns:
        Human-readable warning messages, possibly empty
    """
    warnings = []
    if table.sanitized_headers:
        warnings.append("Some headers were empty or duplicated, so they were normalized.")
    if table.truncated:
        warnings.append(f"Loaded the first {table.row_count} rows to keep editing responsive.")
    if table.inconsistent_row_count:
        warnings.append(
            f"{table.inconsistent_row_count} rows did not have "
            f"{table.expected_column_count} columns and were padded or cut."
        )
    if table.row_count > LARGE_ROW_WARNING_COUNT:
        warnings.append(f"Large dataset loaded ({table.row_count} rows). Editing may feel slower.")
    if table.row_count == 0:
        warnings.append("No data rows were found after the header row.")
    return warnings


def _is_truncated(raw_row_count: int, options: ImportOptions) -> bool:
    return options.max_rows is not None and raw_row_count > options.max_rows


def _is_blank_row(row: Sequence[Any]) -> bool:
    return all(not cell_to_str(cell).strip() for cell in row)


def _normalize_table(matrix: list[list[Any]], options: ImportOptions) -> Table:
    """Shared normalization for tokenized text and row matrices."""
    if not matrix:
        logger.warning("No rows found in dataset")
        return Table(warnings=["No rows found in the dataset."])

    header_row = matrix[0]
    expected_column_count = len(header_row)
    headers = sanitize_headers(header_row)
    columns = [
        Column(id=header.id, raw_header=header.original, label=header.original.strip() or header.id)
        for header in headers
    ]
    sanitized_headers = any(header.was_sanitized for header in headers)

    data_rows = [row for row in matrix[1:] if not _is_blank_row(row)]
    raw_row_count = len(data_rows)

    # Truncate first so the width check and inference stay bounded by max_rows
    truncated = _is_truncated(raw_row_count, options)
    retained = data_rows[: options.max_rows] if truncated else data_rows

    inconsistent_row_count = 0
    records = []
    for row in retained:
        if len(row) != expected_column_count:
            inconsistent_row_count += 1
        records.append(
            {
                column.id: cell_to_str(row[index]) if index < len(row) else ""
                for index, column in enumerate(columns)
            }
        )

    if truncated:
        logger.warning(f"Dataset truncated: kept {len(records)} of {raw_row_count} rows")
    if inconsistent_row_count:
        logger.warning(
            f"{inconsistent_row_count} rows differ from the expected "
            f"{expected_column_count} columns"
        )

    table = Table(
        columns=columns,
        rows=records,
        preview=records[: options.preview_rows],
        row_count=len(records),
        raw_row_count=raw_row_count,
        truncated=truncated,
        sanitized_headers=sanitized_headers,
        expected_column_count=expected_column_count,
        inconsistent_row_count=inconsistent_row_count,
    )

    logger.info(f"Table normalized: {table.row_count} rows, {len(columns)} columns")
    logger.debug(f"Column ids: {table.column_ids}")
    return table.model_copy(update={"warnings": collect_dataset_warnings(table)})
