"""Table data model produced by the dataset importer.

Models are immutable once built. Attribute names are snake_case;
``model_dump(by_alias=True)`` yields the camelCase shape the editor
layer consumes (``rowCount``, ``rawHeader``, ...).
"""

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

TABLE_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class Column(BaseModel):
    """A sanitized column descriptor.

    ``id`` is unique within its table and stable for the lifetime of
    the import.
    """

    id: str = Field(..., min_length=1)
    raw_header: str = ""
    label: str = ""

    model_config = TABLE_MODEL_CONFIG


class Table(BaseModel):
    """Normalized table with import diagnostics.

    ``rows`` holds the raw cell strings keyed by column id; values are
    never coerced at import time. ``sheet_name`` and ``sheet_names`` are
    only set for spreadsheet files.
    """

    columns: list[Column] = Field(default_factory=list)
    rows: list[dict[str, str]] = Field(default_factory=list)
    preview: list[dict[str, str]] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    row_count: int = Field(default=0, ge=0)
    raw_row_count: int = Field(default=0, ge=0)
    truncated: bool = False
    sanitized_headers: bool = False
    expected_column_count: int = Field(default=0, ge=0)
    inconsistent_row_count: int = Field(default=0, ge=0)
    sheet_name: Optional[str] = None
    sheet_names: list[str] = Field(default_factory=list)

    model_config = TABLE_MODEL_CONFIG

    @property
    def column_ids(self) -> list[str]:
        """Column ids in header order."""
        return [column.id for column in self.columns]


def cell_to_str(value: Any) -> str:
    """Convert a raw cell into its string form without trimming.

    None becomes the empty string and booleans use the lowercase
    literals; strings pass through unchanged.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)
