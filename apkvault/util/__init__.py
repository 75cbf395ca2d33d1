"""Utility module initialization."""

from .logging import get_logger, setup_logging
from .paths import (
    available_path,
    ensure_directory,
    format_size,
    list_subdirectories,
    safe_filename,
)
from .timeutil import format_duration, generate_backup_id

__all__ = [
    # logging
    "get_logger",
    "setup_logging",
    # paths
    "available_path",
    "ensure_directory",
    "format_size",
    "list_subdirectories",
    "safe_filename",
    # timeutil
    "format_duration",
    "generate_backup_id",
]
