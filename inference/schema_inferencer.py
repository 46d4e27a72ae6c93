"""Schema inference for imported tables.

This module infers, per column, a semantic type, a role (metric or
dimension) and descriptive statistics from the raw cell strings of a
table. Inference only annotates: the input rows are never modified.
"""

import logging
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Optional, Union

import pandas as pd
from pydantic import BaseModel, Field

from inference.value_parsers import TYPE_RULES, InferredType
from ingestion.table import TABLE_MODEL_CONFIG, Column, cell_to_str
from options import InferenceOptions, resolve_inference_options

logger = logging.getLogger(__name__)

# SchemaError kinds
STRUCTURALLY_INVALID_TABLE = "structurally invalid table"


class SchemaError(Exception):
    """Raised when the inference input is not a table.

    Attributes:
        kind: Machine-checkable failure kind
    """

    def __init__(self, message: str, kind: str = STRUCTURALLY_INVALID_TABLE):
        super().__init__(f"invalid table: {message}")
        self.kind = kind


class InferredRole(str, Enum):
    """Role a column plays when building queries."""

    METRIC = "metric"
    DIMENSION = "dimension"


class ColumnStats(BaseModel):
    """Descriptive statistics for one column.

    ``min``, ``max`` and ``mean`` are set for number columns only;
    ``earliest`` and ``latest`` (ISO dates) for date columns only.
    """

    null_rate: float = Field(..., ge=0.0, le=1.0)
    distinct_count: int = Field(default=0, ge=0)
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    earliest: Optional[str] = None
    latest: Optional[str] = None

    model_config = TABLE_MODEL_CONFIG


class InferredColumn(Column):
    """Column descriptor enriched with inferred type, role and stats."""

    inferred_type: InferredType
    inferred_role: InferredRole
    stats: ColumnStats
    sample_values: list[str] = Field(default_factory=list)


class TableSchema(BaseModel):
    """Inferred schema for a whole table."""

    columns: list[InferredColumn]
    total_rows: int
    total_columns: int

    model_config = TABLE_MODEL_CONFIG

    def column(self, column_id: str) -> InferredColumn:
        """Look up an inferred column by id.

        Raises:
            KeyError: If no column has this id
        """
        for column in self.columns:
            if column.id == column_id:
                return column
        raise KeyError(column_id)


def select_column_type(
    values: list[str], threshold: float
) -> tuple[InferredType, list[Any]]:
    """Pick the first type rule the values conform to.

    Args:
        values: Non-empty, stripped cell strings of one column
        threshold: Share of values a rule must parse, in (0, 1]

    Returns:
        Tuple of (inferred type, parsed values that conformed). String
        columns return no parsed values.
    """
    if not values:
        return InferredType.STRING, []

    for rule in TYPE_RULES:
        parsed = [rule.parse(value) for value in values]
        conforming = [value for value in parsed if value is not None]
        if len(conforming) / len(values) >= threshold:
            return rule.type, conforming

    return InferredType.STRING, []


def infer_column(
    column: Column, rows: Sequence[Mapping[str, Any]], options: InferenceOptions
) -> InferredColumn:
    """Infer type, role and stats for a single column.

    Args:
        column: Column descriptor
        rows: All table rows; missing keys count as empty cells
        options: Validated inference options

    Returns:
        InferredColumn carrying the column's original descriptor fields
    """
    values = [cell_to_str(row.get(column.id)).strip() for row in rows]
    non_empty = [value for value in values if value]
    null_count = len(values) - len(non_empty)
    distinct = list(dict.fromkeys(non_empty))

    inferred_type, parsed = select_column_type(non_empty, options.conformance_threshold)
    inferred_role = (
        InferredRole.METRIC if inferred_type == InferredType.NUMBER else InferredRole.DIMENSION
    )

    stats = {
        "null_rate": null_count / len(values) if values else 0.0,
        "distinct_count": len(distinct),
    }
    if inferred_type == InferredType.NUMBER:
        numbers = pd.Series(parsed, dtype="float64")
        stats.update(
            min=float(numbers.min()),
            max=float(numbers.max()),
            mean=float(numbers.mean()),
        )
    elif inferred_type == InferredType.DATE:
        stats.update(earliest=min(parsed).isoformat(), latest=max(parsed).isoformat())

    return InferredColumn(
        **column.model_dump(include={"id", "raw_header", "label"}),
        inferred_type=inferred_type,
        inferred_role=inferred_role,
        stats=ColumnStats(**stats),
        sample_values=distinct[: options.max_sample_values],
    )


def infer_schema_for_table(
    table: Any,
    options: Optional[Union[InferenceOptions, Mapping[str, Any]]] = None,
) -> TableSchema:
    """Infer column types, roles and stats for a table.

    Accepts a Table, a mapping with ``columns`` and ``rows``, or any
    object exposing those attributes. Columns may be Column models or
    mappings with an ``id``.

    Args:
        table: Table-shaped input
        options: Inference options (threshold, sample size)

    Returns:
        TableSchema with one InferredColumn per input column, same order

    Raises:
        SchemaError: If columns or rows are missing or malformed
    """
    inference_options = resolve_inference_options(options)
    columns, rows = _read_table_structure(table)

    logger.info(f"Inferring schema for {len(columns)} columns over {len(rows)} rows")

    inferred = []
    for column in columns:
        result = infer_column(column, rows, inference_options)
        inferred.append(result)
        logger.debug(
            f"Column '{column.id}': type={result.inferred_type.value}, "
            f"role={result.inferred_role.value}, null_rate={result.stats.null_rate}"
        )

    schema = TableSchema(columns=inferred, total_rows=len(rows), total_columns=len(columns))
    logger.info(f"Schema inference complete: {schema.total_rows} rows, {schema.total_columns} columns")
    return schema


def _read_table_structure(table: Any) -> tuple[list[Column], list[Mapping[str, Any]]]:
    if isinstance(table, Mapping):
        raw_columns = table.get("columns")
        raw_rows = table.get("rows")
    else:
        raw_columns = getattr(table, "columns", None)
        raw_rows = getattr(table, "rows", None)

    if not _is_sequence(raw_columns):
        raise SchemaError("'columns' must be a list of column descriptors")
    if not _is_sequence(raw_rows):
        raise SchemaError("'rows' must be a list of row mappings")

    columns = [_to_column(column, index) for index, column in enumerate(raw_columns)]
    for index, row in enumerate(raw_rows):
        if not isinstance(row, Mapping):
            raise SchemaError(f"row {index} is {type(row).__name__}, expected a mapping")
    return columns, list(raw_rows)


def _to_column(column: Any, index: int) -> Column:
    if isinstance(column, Column):
        return column
    if isinstance(column, Mapping) and column.get("id"):
        column_id = str(column["id"])
        raw_header = column.get("rawHeader", column.get("raw_header", column_id))
        return Column(
            id=column_id,
            raw_header=cell_to_str(raw_header),
            label=cell_to_str(column.get("label") or column_id),
        )
    raise SchemaError(f"column {index} has no id")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))
