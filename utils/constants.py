"""Constants for TabularIngest.

This module defines shared constants used across the application.
"""

# Exit codes (matching CLI exit codes)
EXIT_SUCCESS = 0
EXIT_INVALID_OPTIONS = 1
EXIT_PARSE_ERROR = 2
EXIT_RUNTIME_ERROR = 3

# Application metadata
APP_NAME = "TabularIngest"
APP_VERSION = "1.0.0"

# Supported file formats
SUPPORTED_DATASET_FORMATS = ["csv", "txt", "xlsx", "xls", "parquet"]
SUPPORTED_CONFIG_FORMATS = ["yaml", "yml", "json"]

# Default values
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PREVIEW_ROWS = 10
DEFAULT_CONFORMANCE_THRESHOLD = 1.0
DEFAULT_MAX_SAMPLE_VALUES = 5

# Files above this size are refused by the loader
MAX_FILE_BYTES = 150 * 1024 * 1024

# Tables above this many retained rows get a responsiveness warning
LARGE_ROW_WARNING_COUNT = 100000
