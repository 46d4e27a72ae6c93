"""Tests for schema inference."""

import pytest

from inference import (
    STRUCTURALLY_INVALID_TABLE,
    InferredRole,
    InferredType,
    SchemaError,
    infer_schema_for_table,
)
from ingestion import parse_csv_text
from options import InferenceOptions


@pytest.fixture
def mixed_table():
    """Table mixing number, date, bool and string columns."""
    return {
        "columns": [{"id": "amount"}, {"id": "date"}, {"id": "flag"}, {"id": "mixed"}],
        "rows": [
            {"amount": "$2,000", "date": "2024-01-02", "flag": "true", "mixed": "1"},
            {"amount": "1200", "date": "1/3/2024", "flag": "false", "mixed": "x"},
            {"amount": "(3.50)", "date": "01/04/2024", "flag": "yes", "mixed": "2"},
            {"amount": "10%", "date": "2024/01/05", "flag": "no", "mixed": "y"},
            {"amount": "8", "date": "2024-01-06", "flag": "y", "mixed": "3"},
            {"amount": "11", "date": "2024-01-07", "flag": "n", "mixed": "z"},
            {"amount": "0", "date": "2024-01-08", "flag": "true", "mixed": "4"},
            {"amount": "", "date": "", "flag": "false", "mixed": "w"},
            {"amount": "5", "date": "2024-01-09", "flag": "true", "mixed": "5"},
            {"amount": "9", "date": "2024-01-10", "flag": "false", "mixed": "v"},
        ],
    }


def test_numeric_column_infers_metric_with_stats(mixed_table):
    """Formatted numbers infer as a metric with min/max/mean."""
    amount = infer_schema_for_table(mixed_table).column("amount")

    assert amount.inferred_type == InferredType.NUMBER
    assert amount.inferred_role == InferredRole.METRIC
    assert amount.stats.min == -3.5
    assert amount.stats.max == 2000
    assert amount.stats.null_rate > 0
    assert amount.stats.null_rate == pytest.approx(0.1)
    expected_mean = (2000 + 1200 - 3.5 + 0.1 + 8 + 11 + 0 + 5 + 9) / 9
    assert amount.stats.mean == pytest.approx(expected_mean)


def test_date_bool_and_mixed_columns(mixed_table):
    """Dates and booleans are dimensions; mixed values fall back to string."""
    schema = infer_schema_for_table(mixed_table)

    date_column = schema.column("date")
    assert date_column.inferred_type == InferredType.DATE
    assert date_column.inferred_role == InferredRole.DIMENSION
    assert date_column.stats.earliest == "2024-01-02"
    assert date_column.stats.latest == "2024-01-10"
    assert date_column.stats.min is None

    flag = schema.column("flag")
    assert flag.inferred_type == InferredType.BOOL
    assert flag.inferred_role == InferredRole.DIMENSION

    mixed = schema.column("mixed")
    assert mixed.inferred_type == InferredType.STRING
    assert mixed.inferred_role == InferredRole.DIMENSION


def test_non_numeric_columns_have_no_numeric_stats(mixed_table):
    """Only number columns carry min, max and mean."""
    schema = infer_schema_for_table(mixed_table)
    for column_id in ("date", "flag", "mixed"):
        stats = schema.column(column_id).stats
        assert (stats.min, stats.max, stats.mean) == (None, None, None)


def test_role_follows_type(mixed_table):
    """metric iff number."""
    for column in infer_schema_for_table(mixed_table).columns:
        assert (column.inferred_role == InferredRole.METRIC) == (
            column.inferred_type == InferredType.NUMBER
        )


def test_single_bad_value_disqualifies_number():
    """One non-numeric value makes the column a string."""
    table = {"columns": [{"id": "v"}], "rows": [{"v": "1"}, {"v": "2"}, {"v": "n/a"}]}
    column = infer_schema_for_table(table).column("v")
    assert column.inferred_type == InferredType.STRING


def test_lower_threshold_allows_mostly_numeric_column():
    """With a 0.6 threshold a mostly numeric column is a number."""
    table = {"columns": [{"id": "v"}], "rows": [{"v": "1"}, {"v": "2"}, {"v": "n/a"}]}
    column = infer_schema_for_table(table, InferenceOptions(conformance_threshold=0.6)).column("v")
    assert column.inferred_type == InferredType.NUMBER
    assert (column.stats.min, column.stats.max) == (1.0, 2.0)


def test_empty_column_is_string_with_full_null_rate():
    """A column with only empty cells is a string dimension."""
    table = {"columns": [{"id": "v"}], "rows": [{"v": ""}, {"v": "  "}, {}]}
    column = infer_schema_for_table(table).column("v")
    assert column.inferred_type == InferredType.STRING
    assert column.stats.null_rate == 1.0
    assert column.stats.distinct_count == 0


def test_zero_rows_have_zero_null_rate():
    """Tables without rows report a null rate of 0."""
    column = infer_schema_for_table({"columns": [{"id": "v"}], "rows": []}).column("v")
    assert column.stats.null_rate == 0
    assert column.inferred_type == InferredType.STRING


def test_null_rate_is_exact_fraction():
    """Null rate is the exact ratio of empty cells to rows."""
    table = {"columns": [{"id": "v"}], "rows": [{"v": "1"}, {"v": "2"}, {"v": ""}]}
    assert infer_schema_for_table(table).column("v").stats.null_rate == 1 / 3


def test_single_empty_cell_in_large_table_is_reported():
    """One empty cell among many rows still yields a non-zero null rate."""
    rows = [{"v": "1"} for _ in range(20000)] + [{"v": ""}]
    column = infer_schema_for_table({"columns": [{"id": "v"}], "rows": rows}).column("v")
    assert column.stats.null_rate > 0
    assert column.stats.null_rate == 1 / 20001


def test_zero_and_one_are_numbers_not_booleans():
    """0/1 are not boolean literals."""
    table = {"columns": [{"id": "v"}], "rows": [{"v": "0"}, {"v": "1"}]}
    assert infer_schema_for_table(table).column("v").inferred_type == InferredType.NUMBER


def test_sample_values_and_distinct_count():
    """Samples are the first distinct non-empty values."""
    rows = [{"c": value} for value in ["b", "a", "b", "", "c", "d", "e", "f"]]
    column = infer_schema_for_table({"columns": [{"id": "c"}], "rows": rows}).column("c")
    assert column.sample_values == ["b", "a", "c", "d", "e"]
    assert column.stats.distinct_count == 6


def test_inference_on_imported_table_keeps_column_fields():
    """Columns from the importer keep their raw header and label."""
    table = parse_csv_text("Total Amount,Region\n1,north\n2,south\n")
    schema = infer_schema_for_table(table)

    amount = schema.column("total_amount")
    assert amount.raw_header == "Total Amount"
    assert amount.label == "Total Amount"
    assert amount.inferred_type == InferredType.NUMBER
    assert schema.total_rows == 2
    assert schema.total_columns == 2
    assert [column.id for column in schema.columns] == ["total_amount", "region"]


def test_inference_does_not_mutate_rows():
    """Raw cell strings are left untouched."""
    table = parse_csv_text("amount\n$1,000\n(5)\n")
    before = [dict(row) for row in table.rows]
    infer_schema_for_table(table)
    assert table.rows == before


def test_schema_serializes_with_camel_case_aliases(mixed_table):
    """Dumped columns use the editor-facing field names."""
    data = infer_schema_for_table(mixed_table).model_dump(mode="json", by_alias=True)
    amount = data["columns"][0]
    assert amount["inferredType"] == "number"
    assert amount["inferredRole"] == "metric"
    assert amount["stats"]["nullRate"] == pytest.approx(0.1)


@pytest.mark.parametrize(
    "table",
    [
        {"rows": []},
        {"columns": []},
        {"columns": "abc", "rows": []},
        {"columns": [{"label": "no id"}], "rows": []},
        {"columns": [{"id": "a"}], "rows": ["not a mapping"]},
        None,
    ],
)
def test_structurally_invalid_tables_raise(table):
    """Missing or malformed columns/rows raise SchemaError."""
    with pytest.raises(SchemaError, match="invalid table") as exc_info:
        infer_schema_for_table(table)
    assert exc_info.value.kind == STRUCTURALLY_INVALID_TABLE


def test_object_with_attributes_is_accepted():
    """Any object exposing columns and rows works."""

    class TableLike:
        columns = [{"id": "n"}]
        rows = [{"n": "3"}]

    column = infer_schema_for_table(TableLike()).column("n")
    assert column.inferred_type == InferredType.NUMBER
