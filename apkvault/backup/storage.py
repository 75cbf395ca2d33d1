"""Backup storage layout management."""

import typing as t
from datetime import datetime
from pathlib import Path

from ..util.paths import ensure_directory, list_subdirectories, safe_filename
from ..util.timeutil import generate_backup_id

DATE_TOKEN = "$date"


class BackupExistsError(Exception):
    """A backup with the requested name already exists."""
    pass


class BackupStorage:
    """Manages the backup root layout.

    The root holds one directory per backup; each backup holds one
    directory per package containing that package's installer files.
    """

    def __init__(self, base_path: Path) -> None:
        """Initialize backup storage.

        Args:
            base_path: Base directory for all backups
        """
        self.base_path = Path(base_path)

    def exists(self) -> bool:
        """Whether the backup root exists."""
        return self.base_path.is_dir()

    def ensure_root(self) -> Path:
        """Create the backup root if it is missing."""
        return ensure_directory(self.base_path)

    def list_backups(self) -> t.List[Path]:
        """List backup directories sorted by name.

        Returns:
            Backup directories, empty if the root does not exist
        """
        return list_subdirectories(self.base_path)

    def backup_path(self, name: str) -> Path:
        """Get the directory a backup with this name lives in."""
        return self.base_path / name

    def resolve_backup_name(self, raw_name: str, now: t.Optional[datetime] = None) -> str:
        """Turn user input into a backup directory name.

        An empty name becomes a ``YYYYMMDDHHMMSS`` timestamp and every
        ``$date`` token is replaced by that same timestamp.

        Args:
            raw_name: Name as typed by the user
            now: Time used for the timestamp (current time if None)

        Returns:
            Filesystem-safe directory name
        """
        timestamp = generate_backup_id(now)
        name = raw_name.strip()

        if not name:
            return timestamp

        return safe_filename(name.replace(DATE_TOKEN, timestamp))

    def create_backup(self, name: str) -> Path:
        """Create a new backup directory.

        Args:
            name: Backup directory name

        Returns:
            Path to the created directory

        Raises:
            BackupExistsError: If a backup with this name already exists
        """
        self.ensure_root()
        path = self.backup_path(name)

        try:
            path.mkdir()
        except FileExistsError as e:
            raise BackupExistsError(f"Backup already exists: {name}") from e

        return path

    def list_package_dirs(self, backup_dir: Path) -> t.List[Path]:
        """List the package directories of a backup, sorted by name."""
        return list_subdirectories(backup_dir)

    def list_packages(self, backup_dir: Path) -> t.List[str]:
        """List the names of the packages stored in a backup."""
        return [d.name for d in self.list_package_dirs(backup_dir)]
