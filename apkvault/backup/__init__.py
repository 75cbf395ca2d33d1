"""Backup module initialization."""

from .differential import select_packages
from .storage import BackupExistsError, BackupStorage
from .executor import BackupExecutor

__all__ = [
    # storage
    "BackupExistsError",
    "BackupStorage",
    # differential
    "select_packages",
    # executor
    "BackupExecutor",
]
