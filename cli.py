"""Command-line interface for TabularIngest.

This module provides the CLI entry point. It handles argument parsing,
option loading, and runs import plus schema inference on a dataset file.
"""

import argparse
import json
import sys
from typing import Optional

from inference import SchemaError, TableSchema, infer_schema_for_table
from ingestion import DatasetLoadError, ParseError, Table, load_dataset, to_dataframe
from options import (
    OptionsValidationError,
    ToolConfig,
    load_and_validate_config,
    resolve_import_options,
    resolve_inference_options,
)
from utils import (
    APP_NAME,
    APP_VERSION,
    EXIT_INVALID_OPTIONS,
    EXIT_PARSE_ERROR,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    get_logger,
    setup_logging,
)

logger = get_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="tabular-ingest",
        description=f"{APP_NAME} - import tabular files and infer their schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    subparsers = parser.add_subparsers(
        dest="command", help="Command to execute", required=True
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Import a dataset file and report its inferred schema"
    )
    inspect_parser.add_argument("path", help="Dataset file (.csv, .txt, .xlsx, .xls, .parquet)")
    inspect_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML or JSON file with 'importer' and 'inference' options",
    )
    inspect_parser.add_argument(
        "--max-rows",
        type=int,
        default=None,
        help="Keep at most this many data rows (default: unbounded)",
    )
    inspect_parser.add_argument(
        "--preview-rows",
        type=int,
        default=None,
        help="Number of rows to show in the preview",
    )
    inspect_parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Share of non-empty values a type must match (0 < t <= 1)",
    )
    inspect_parser.add_argument(
        "--sheet",
        type=str,
        default=None,
        help="Workbook sheet to read (Excel files only; default: first sheet)",
    )
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        help="Print table and schema as JSON",
    )
    inspect_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    inspect_parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level for progress messages on stderr (overrides --verbose)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ToolConfig:
    """Merge the optional config file with command-line overrides.

    Raises:
        OptionsValidationError: If the file or an override is invalid
    """
    config = load_and_validate_config(args.config) if args.config else ToolConfig()

    importer = config.importer.model_dump()
    if args.max_rows is not None:
        importer["max_rows"] = args.max_rows
    if args.preview_rows is not None:
        importer["preview_rows"] = args.preview_rows

    inference = config.inference.model_dump()
    if args.threshold is not None:
        inference["conformance_threshold"] = args.threshold

    return ToolConfig(
        importer=resolve_import_options(importer),
        inference=resolve_inference_options(inference),
    )


def format_report(table: Table, schema: TableSchema, preview_rows: int) -> str:
    """Render a plain-text report of the import and inferred schema."""
    lines = [
        f"Rows: {table.row_count} retained of {table.raw_row_count}"
        + (" (truncated)" if table.truncated else ""),
        f"Columns: {len(table.columns)} (expected width {table.expected_column_count}, "
        f"{table.inconsistent_row_count} inconsistent rows)",
    ]
    if table.sheet_name is not None:
        lines.append(f"Sheet: {table.sheet_name} (of {', '.join(table.sheet_names)})")
    for warning in table.warnings:
        lines.append(f"! {warning}")

    lines.append("")
    lines.append("Schema:")
    for column in schema.columns:
        stats = column.stats
        detail = f"null_rate={stats.null_rate:.2%}, distinct={stats.distinct_count}"
        if stats.min is not None:
            detail += f", min={stats.min:g}, max={stats.max:g}, mean={stats.mean:g}"
        if stats.earliest is not None:
            detail += f", from {stats.earliest} to {stats.latest}"
        lines.append(
            f"  {column.id:<24} {column.inferred_type.value:<7} "
            f"{column.inferred_role.value:<9} {detail}"
        )

    if preview_rows and table.rows:
        lines.append("")
        lines.append("Preview:")
        lines.append(to_dataframe(table).head(preview_rows).to_string(index=False))

    return "\n".join(lines)


def inspect_dataset(args: argparse.Namespace) -> int:
    """Run import and inference for the 'inspect' command.

    Returns:
        Exit code
    """
    try:
        config = build_config(args)
    except OptionsValidationError as e:
        print(f"✗ Invalid options:\n{e}", file=sys.stderr)
        return EXIT_INVALID_OPTIONS

    try:
        table = load_dataset(args.path, config.importer, sheet_name=args.sheet)
        schema = infer_schema_for_table(table, config.inference)
    except (DatasetLoadError, ParseError, SchemaError) as e:
        print(f"✗ Could not import {args.path}: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    if args.json:
        payload = {
            "table": table.model_dump(mode="json", by_alias=True),
            "schema": schema.model_dump(mode="json", by_alias=True),
        }
        print(json.dumps(payload, indent=2))
    else:
        print(format_report(table, schema, config.importer.preview_rows))

    return EXIT_SUCCESS


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = parse_args(argv)

    setup_logging(verbose=args.verbose, level=args.log_level)

    if args.command == "inspect":
        try:
            return inspect_dataset(args)
        except KeyboardInterrupt:
            print("\n✗ Interrupted by user", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        except Exception as e:
            print(f"✗ Runtime error: {e}", file=sys.stderr)
            logger.exception("Unexpected error during inspection")
            return EXIT_RUNTIME_ERROR

    print(f"Unknown command: {args.command}", file=sys.stderr)
    return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
