"""Dataset file loader.

This module reads dataset files from disk (CSV, Excel, Parquet) and hands
their contents to the importer. Spreadsheet and Parquet files are read
with pandas as strings so the importer sees raw cell text.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

import pandas as pd

from ingestion.importer import parse_csv_text, parse_row_matrix
from ingestion.table import Table
from options import ImportOptions, resolve_import_options
from utils import PathValidationError, format_bytes, get_logger, validate_path_safe

logger = get_logger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xls")


class DatasetLoadError(Exception):
    """Raised when dataset loading fails."""

    pass


def load_dataset(
    file_path: str | Path,
    options: Optional[Union[ImportOptions, Mapping[str, Any]]] = None,
    sheet_name: Optional[str] = None,
) -> Table:
    """Load a dataset file into a normalized table.

    Args:
        file_path: Path to dataset file (.csv, .txt, .xlsx, .xls, .parquet)
        options: Import options passed through to the importer
        sheet_name: Workbook sheet to read; defaults to the first sheet.
            Only valid for Excel files.

    Returns:
        Normalized Table. Excel tables also carry ``sheet_name`` and
        ``sheet_names``.

    Raises:
        DatasetLoadError: If the file doesn't exist, is too large, the format
            is unsupported, the sheet is missing or empty, or reading fails
        ParseError: If CSV text is empty or its quoting is malformed
        OptionsValidationError: If options hold invalid values
    """
    import_options = resolve_import_options(options)

    try:
        file_path = validate_path_safe(
            file_path, must_exist=True, must_be_file=True
        )
    except PathValidationError as e:
        raise DatasetLoadError(f"Invalid dataset path: {e}") from e
    except FileNotFoundError as e:
        raise DatasetLoadError(f"Dataset file not found: {file_path}") from e

    suffix = file_path.suffix.lower()
    if suffix not in (".csv", ".txt", ".parquet") + EXCEL_SUFFIXES:
        raise DatasetLoadError(
            f"Unsupported file format: {suffix}. "
            "Supported formats: .csv, .txt, .xlsx, .xls, .parquet"
        )
    if sheet_name is not None and suffix not in EXCEL_SUFFIXES:
        raise DatasetLoadError(
            f"Sheet selection only applies to Excel workbooks, not {suffix} files"
        )

    file_size = file_path.stat().st_size
    if file_size > import_options.max_file_bytes:
        raise DatasetLoadError(
            f"This file is {format_bytes(file_size)}. Please import a file "
            f"smaller than {format_bytes(import_options.max_file_bytes)}."
        )

    logger.info(f"Loading dataset from: {file_path}")
    logger.debug(f"File format: {suffix}, size: {format_bytes(file_size)}")

    try:
        if suffix in (".csv", ".txt"):
            text = file_path.read_text(encoding="utf-8-sig")
            return parse_csv_text(text, import_options)
        if suffix in EXCEL_SUFFIXES:
            return _load_workbook(file_path, sheet_name, import_options)
        df = pd.read_parquet(file_path)
        return parse_row_matrix(dataframe_to_matrix(df), import_options)
    except (OSError, IOError) as e:
        raise DatasetLoadError(f"Failed to read dataset file {file_path}: I/O error: {e}") from e
    except UnicodeDecodeError as e:
        raise DatasetLoadError(f"Failed to decode dataset file {file_path}: {e}") from e
    except ImportError as e:
        raise DatasetLoadError(
            f"Failed to load dataset {file_path}: Missing required library for {suffix} format: {e}"
        ) from e
    except ValueError as e:
        raise DatasetLoadError(f"Failed to parse dataset file {file_path}: {e}") from e


def _load_workbook(
    file_path: Path, sheet_name: Optional[str], options: ImportOptions
) -> Table:
    with pd.ExcelFile(file_path) as workbook:
        sheet_names = [str(name) for name in workbook.sheet_names]
        if not sheet_names:
            raise DatasetLoadError("No sheets were found in this workbook.")

        target = sheet_name or sheet_names[0]
        if target not in sheet_names:
            raise DatasetLoadError(
                f"Sheet '{target}' not found. Available sheets: {', '.join(sheet_names)}"
            )

        logger.info(f"Reading sheet '{target}' ({len(sheet_names)} sheets in workbook)")
        df = pd.read_excel(
            workbook, sheet_name=target, header=None, dtype=str, keep_default_na=False
        ).fillna("")

    rows = [row for row in df.values.tolist() if any(str(cell).strip() for cell in row)]
    if not rows:
        raise DatasetLoadError("The selected sheet is empty.")

    table = parse_row_matrix(rows, options)
    return table.model_copy(update={"sheet_name": target, "sheet_names": sheet_names})


def dataframe_to_matrix(df: pd.DataFrame) -> list[list[str]]:
    """Convert a DataFrame into a header-first matrix of strings.

    Missing values become empty strings.
    """
    header = [str(column) for column in df.columns]
    body = df.astype(object).where(df.notna(), "").astype(str).values.tolist()
    return [header] + body


def to_dataframe(table: Table) -> pd.DataFrame:
    """Build a string-typed DataFrame view of a table's rows.

    Columns follow header order. The table itself is not modified.
    """
    return pd.DataFrame(table.rows, columns=table.column_ids, dtype=str)
