"""File helper utilities for TabularIngest.

This module provides the path checks shared by the dataset loader
and the options loader.
"""

import logging
from pathlib import Path
from typing import Optional

from .constants import SUPPORTED_CONFIG_FORMATS, SUPPORTED_DATASET_FORMATS

logger = logging.getLogger(__name__)


class PathValidationError(Exception):
    """Raised when path validation fails due to security concerns."""

    pass


def get_file_extension(file_path: str | Path) -> str:
    """Get file extension from path.

    Args:
        file_path: File path

    Returns:
        File extension (without dot), empty string if no extension
    """
    path = Path(file_path)
    return path.suffix.lstrip(".").lower()


def is_supported_dataset_format(file_path: str | Path) -> bool:
    """Check if file is a supported dataset format."""
    return get_file_extension(file_path) in SUPPORTED_DATASET_FORMATS


def is_supported_config_format(file_path: str | Path) -> bool:
    """Check if file is a supported config format."""
    return get_file_extension(file_path) in SUPPORTED_CONFIG_FORMATS


def validate_path_safe(
    file_path: str | Path,
    base_dir: Optional[Path] = None,
    must_exist: bool = False,
    must_be_file: bool = False,
) -> Path:
    """Validate a user-supplied path before reading from it.

    This function:
    - Rejects directory traversal segments (..)
    - Resolves the path so symlinks are followed once, here
    - Optionally checks the path stays within a base directory
    - Validates file existence and type

    Args:
        file_path: Path to validate
        base_dir: Optional base directory to restrict paths within
        must_exist: If True, path must exist
        must_be_file: If True, path must be a regular file

    Returns:
        Resolved Path object

    Raises:
        PathValidationError: If path contains traversal or violates constraints
        FileNotFoundError: If must_exist=True and path doesn't exist
    """
    path = Path(file_path).expanduser()

    if ".." in path.parts:
        raise PathValidationError(
            f"Path contains directory traversal sequence: {file_path}"
        )

    try:
        resolved = path.resolve()
    except (OSError, RuntimeError) as e:
        raise PathValidationError(f"Failed to resolve path {file_path}: {e}") from e

    if base_dir is not None:
        base_resolved = Path(base_dir).expanduser().resolve()
        if not resolved.is_relative_to(base_resolved):
            raise PathValidationError(
                f"Path {file_path} is outside allowed base directory {base_dir}"
            )

    if must_exist and not resolved.exists():
        raise FileNotFoundError(f"Path does not exist: {file_path}")

    if must_be_file and not resolved.is_file():
        if resolved.exists():
            raise PathValidationError(f"Path is not a file: {file_path}")
        raise FileNotFoundError(f"File does not exist: {file_path}")

    logger.debug(f"Validated path: {resolved}")
    return resolved


def format_bytes(size: int) -> str:
    """Format a byte count for messages (``512 B``, ``1.5 KB``, ``150.0 MB``)."""
    if size < 1024:
        return f"{size} B"
    kb = size / 1024
    if kb < 1024:
        return f"{kb:.1f} KB"
    return f"{kb / 1024:.1f} MB"
