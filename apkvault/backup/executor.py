"""Backup execution engine."""

import typing as t
from pathlib import Path

from ..adb.device import ADBDevice
from ..adb.package import PackageManager
from ..apps.apk_backup import APKBackup, BackupResult
from ..util.logging import get_logger
from .differential import select_packages
from .storage import BackupStorage

logger = get_logger(__name__)


class BackupExecutor:
    """Executes full and differential backups."""

    def __init__(self, device: ADBDevice, storage: BackupStorage, show_progress: bool = True) -> None:
        """Initialize backup executor.

        Args:
            device: Device to back up
            storage: Backup storage manager
            show_progress: Whether to draw a progress bar while extracting
        """
        self.device = device
        self.storage = storage
        self.package_manager = PackageManager(device)
        self.apk_backup = APKBackup(device, show_progress=show_progress)

    def plan(self, base_backup: t.Optional[Path] = None) -> t.List[str]:
        """Work out which device packages a backup has to extract.

        Args:
            base_backup: Backup whose packages are skipped (None for a full backup)

        Returns:
            Package names in device order

        Raises:
            ADBError: If the device package list cannot be read
        """
        device_packages = self.package_manager.list_third_party_packages()
        base_packages = self.storage.list_packages(base_backup) if base_backup else []

        packages = select_packages(device_packages, base_packages)

        if base_backup is not None:
            logger.info(
                f"{len(device_packages)} packages on device, {len(base_packages)} in "
                f"{base_backup.name}, {len(packages)} to back up"
            )
        return packages

    def execute_backup(
        self,
        name: str,
        base_backup: t.Optional[Path] = None,
        progress_callback: t.Optional[t.Callable[[int, int, str], None]] = None
    ) -> BackupResult:
        """Create backup ``name`` and extract the planned packages into it.

        No directory is created when there is nothing to back up; the
        returned result then has no ``target_dir``.

        Raises:
            ADBError: If the device package list cannot be read
            BackupExistsError: If backup ``name`` already exists
        """
        packages = self.plan(base_backup)

        if not packages:
            logger.info("No package differences found for device.")
            return BackupResult()

        target_dir = self.storage.create_backup(name)
        logger.info(f"Backing up {len(packages)} packages to {target_dir}")

        return self.apk_backup.backup_packages(packages, target_dir, progress_callback)
