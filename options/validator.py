"""Options loading and validation.

This module handles loading YAML/JSON configuration files and validating
them (or plain mappings passed by callers) against the option schemas.
It provides clear, user-friendly error messages.
"""

import json
import pathlib
from collections.abc import Mapping
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from options.schema import ImportOptions, InferenceOptions, ToolConfig
from utils import PathValidationError, validate_path_safe


class OptionsValidationError(Exception):
    """Raised when options cannot be loaded or fail validation."""

    pass


def load_config_file(config_path: Union[str, pathlib.Path]) -> dict:
    """Load configuration from YAML or JSON file.

    Args:
        config_path: Path to configuration file

    Returns:
        Dictionary containing configuration

    Raises:
        OptionsValidationError: If file cannot be loaded or parsed
    """
    try:
        config_path = validate_path_safe(
            config_path, must_exist=True, must_be_file=True
        )
    except PathValidationError as e:
        raise OptionsValidationError(f"Invalid configuration path: {e}") from e
    except FileNotFoundError as e:
        raise OptionsValidationError(f"Configuration file not found: {config_path}") from e

    suffix = config_path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise OptionsValidationError(
            f"Unsupported file format: {config_path.suffix}. "
            "Supported formats: .yaml, .yml, .json"
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if suffix == ".json":
                config = json.load(f)
            else:
                config = yaml.safe_load(f)
    except (OSError, IOError) as e:
        raise OptionsValidationError(f"Failed to read configuration file {config_path}: I/O error: {e}") from e
    except yaml.YAMLError as e:
        raise OptionsValidationError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise OptionsValidationError(f"Invalid JSON syntax in {config_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise OptionsValidationError(f"Failed to decode configuration file {config_path}: Encoding error: {e}") from e

    if config is None:
        raise OptionsValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise OptionsValidationError(
            f"Configuration must be a dictionary, got {type(config).__name__}"
        )

    return config


def validate_config(config: dict) -> ToolConfig:
    """Validate a configuration dictionary against ToolConfig.

    Args:
        config: Configuration dictionary

    Returns:
        Validated ToolConfig instance

    Raises:
        OptionsValidationError: If validation fails
    """
    try:
        return ToolConfig.model_validate(config)
    except ValidationError as e:
        raise OptionsValidationError(
            f"Configuration validation failed:\n{_format_validation_error(e)}"
        ) from e


def load_and_validate_config(config_path: Union[str, pathlib.Path]) -> ToolConfig:
    """Load and validate configuration from a YAML or JSON file.

    This is the main entry point for file-based configuration.
    """
    return validate_config(load_config_file(config_path))


def resolve_import_options(
    options: Optional[Union[ImportOptions, Mapping[str, Any]]],
) -> ImportOptions:
    """Coerce caller-supplied import options into ImportOptions.

    Accepts None (all defaults), an ImportOptions instance, or a mapping
    with camelCase or snake_case keys.

    Raises:
        OptionsValidationError: If the mapping holds invalid values
    """
    if options is None:
        return ImportOptions()
    if isinstance(options, ImportOptions):
        return options
    return _validate_mapping(ImportOptions, options)


def resolve_inference_options(
    options: Optional[Union[InferenceOptions, Mapping[str, Any]]],
) -> InferenceOptions:
    """Coerce caller-supplied inference options into InferenceOptions."""
    if options is None:
        return InferenceOptions()
    if isinstance(options, InferenceOptions):
        return options
    return _validate_mapping(InferenceOptions, options)


def _validate_mapping(model, options):
    if not isinstance(options, Mapping):
        raise OptionsValidationError(
            f"{model.__name__} must be a mapping, got {type(options).__name__}"
        )
    try:
        return model.model_validate(dict(options))
    except ValidationError as e:
        raise OptionsValidationError(
            f"Invalid {model.__name__}:\n{_format_validation_error(e)}"
        ) from e


def _format_validation_error(error: ValidationError) -> str:
    """Format a Pydantic ValidationError for user-friendly display.

    Args:
        error: Exception from Pydantic validation

    Returns:
        One line per failing field
    """
    errors = []
    for err in error.errors():
        field_path = " -> ".join(str(loc) for loc in err.get("loc", []))
        error_msg = err.get("msg", "Validation error")
        error_type = err.get("type", "unknown")
        errors.append(f"  {field_path}: {error_msg} ({error_type})")
    return "\n".join(errors)
