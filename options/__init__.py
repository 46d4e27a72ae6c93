"""Import and inference options.

Validated, immutable option records and the loaders that build them
from YAML/JSON files or caller-supplied mappings.
"""

from .schema import ImportOptions, InferenceOptions, ToolConfig
from .validator import (
    OptionsValidationError,
    load_and_validate_config,
    load_config_file,
    resolve_import_options,
    resolve_inference_options,
    validate_config,
)

__all__ = [
    "ImportOptions",
    "InferenceOptions",
    "ToolConfig",
    "OptionsValidationError",
    "load_and_validate_config",
    "load_config_file",
    "resolve_import_options",
    "resolve_inference_options",
    "validate_config",
]
