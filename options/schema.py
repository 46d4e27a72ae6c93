"""Option schemas for import and inference using Pydantic.

Options are immutable once validated. Field names are snake_case in
Python and accept the camelCase spelling used by the editor layer
(``maxRows``, ``previewRows``, ...).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from utils.constants import (
    DEFAULT_CONFORMANCE_THRESHOLD,
    DEFAULT_MAX_SAMPLE_VALUES,
    DEFAULT_PREVIEW_ROWS,
    MAX_FILE_BYTES,
)


class ImportOptions(BaseModel):
    """Options for the dataset importer.

    ``max_rows=None`` means unbounded; zero is rejected rather than
    treated as "no limit".
    """

    max_rows: Optional[int] = Field(
        default=None, ge=1, description="Maximum number of data rows to retain"
    )
    preview_rows: int = Field(
        default=DEFAULT_PREVIEW_ROWS,
        ge=0,
        description="Number of rows exposed as the table preview",
    )
    max_file_bytes: int = Field(
        default=MAX_FILE_BYTES,
        ge=1,
        description="Largest dataset file the loader will read",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class InferenceOptions(BaseModel):
    """Options for the schema inferrer."""

    conformance_threshold: float = Field(
        default=DEFAULT_CONFORMANCE_THRESHOLD,
        gt=0.0,
        le=1.0,
        description="Share of non-empty values a type rule must match",
    )
    max_sample_values: int = Field(
        default=DEFAULT_MAX_SAMPLE_VALUES,
        ge=0,
        description="Distinct sample values kept per column",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ToolConfig(BaseModel):
    """Complete configuration file contents."""

    importer: ImportOptions = Field(default_factory=ImportOptions)
    inference: InferenceOptions = Field(default_factory=InferenceOptions)

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )
