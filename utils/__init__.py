"""Shared utilities for TabularIngest.

This module provides common utilities used across the application.
"""

from .constants import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_CONFORMANCE_THRESHOLD,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_SAMPLE_VALUES,
    DEFAULT_PREVIEW_ROWS,
    EXIT_INVALID_OPTIONS,
    EXIT_PARSE_ERROR,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    LARGE_ROW_WARNING_COUNT,
    MAX_FILE_BYTES,
    SUPPORTED_CONFIG_FORMATS,
    SUPPORTED_DATASET_FORMATS,
)
from .file_helpers import (
    format_bytes,
    get_file_extension,
    is_supported_config_format,
    is_supported_dataset_format,
    PathValidationError,
    validate_path_safe,
)
from .logging import PROJECT_LOGGERS, get_logger, resolve_log_level, setup_logging

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "DEFAULT_CONFORMANCE_THRESHOLD",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_MAX_SAMPLE_VALUES",
    "DEFAULT_PREVIEW_ROWS",
    "EXIT_INVALID_OPTIONS",
    "EXIT_PARSE_ERROR",
    "EXIT_RUNTIME_ERROR",
    "EXIT_SUCCESS",
    "LARGE_ROW_WARNING_COUNT",
    "MAX_FILE_BYTES",
    "SUPPORTED_CONFIG_FORMATS",
    "SUPPORTED_DATASET_FORMATS",
    "format_bytes",
    "get_file_extension",
    "get_logger",
    "is_supported_config_format",
    "is_supported_dataset_format",
    "PathValidationError",
    "PROJECT_LOGGERS",
    "resolve_log_level",
    "setup_logging",
    "validate_path_safe",
]
