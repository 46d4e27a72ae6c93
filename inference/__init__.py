"""Schema inference: per-column types, roles and statistics.

This module infers semantic types for the raw string columns of an
imported table. All outputs are machine-readable structured objects.
"""

from .schema_inferencer import (
    STRUCTURALLY_INVALID_TABLE,
    ColumnStats,
    InferredColumn,
    InferredRole,
    SchemaError,
    TableSchema,
    infer_column,
    infer_schema_for_table,
    select_column_type,
)
from .value_parsers import (
    TYPE_RULES,
    InferredType,
    TypeRule,
    parse_bool,
    parse_date,
    parse_number,
)

__all__ = [
    "infer_schema_for_table",
    "infer_column",
    "select_column_type",
    "TableSchema",
    "InferredColumn",
    "ColumnStats",
    "InferredType",
    "InferredRole",
    "SchemaError",
    "STRUCTURALLY_INVALID_TABLE",
    "TYPE_RULES",
    "TypeRule",
    "parse_bool",
    "parse_date",
    "parse_number",
]
