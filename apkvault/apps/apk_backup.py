"""APK backup functionality."""

import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Callable, List, Optional

from tqdm import tqdm

from ..adb.device import ADBDevice, ADBError
from ..adb.package import PackageManager
from ..adb.pull import FilePuller
from ..util.logging import get_logger
from ..util.paths import available_path, ensure_directory, format_size

logger = get_logger(__name__)


@dataclass
class PackageBackupResult:
    """Outcome of extracting one package."""

    package: str
    remote_paths: List[str] = field(default_factory=list)
    files: List[Path] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    error: str = ""

    @property
    def success(self) -> bool:
        return not self.error and bool(self.files)

    @property
    def size(self) -> int:
        return sum(f.stat().st_size for f in self.files if f.exists())


@dataclass
class BackupResult:
    """Outcome of a backup run."""

    target_dir: Optional[Path] = None
    packages: List[PackageBackupResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.packages)

    @property
    def succeeded(self) -> List[PackageBackupResult]:
        return [p for p in self.packages if p.success]

    @property
    def failed(self) -> List[PackageBackupResult]:
        return [p for p in self.packages if not p.success]

    @property
    def file_count(self) -> int:
        return sum(len(p.files) for p in self.packages)

    @property
    def total_size(self) -> int:
        return sum(p.size for p in self.packages)


class APKBackup:
    """Handles APK backup operations."""

    def __init__(self, device: ADBDevice, show_progress: bool = True):
        self.device = device
        self.show_progress = show_progress
        self.package_manager = PackageManager(device)
        self.puller = FilePuller(device)

    def backup_packages(
        self,
        package_names: List[str],
        output_dir: Path,
        progress_callback: Optional[Callable[[int, int, str], None]] = None
    ) -> BackupResult:
        """Backup specific packages into ``output_dir``, one directory each."""

        logger.info(f"Starting backup of {len(package_names)} packages...")

        ensure_directory(output_dir)
        result = BackupResult(target_dir=output_dir)

        with tqdm(
            total=len(package_names),
            desc="Backing up APKs",
            unit="apk",
            disable=not self.show_progress,
        ) as pbar:
            for i, package_name in enumerate(package_names):
                if progress_callback:
                    progress_callback(i + 1, len(package_names), package_name)

                pbar.set_postfix_str(package_name)

                package_result = self._backup_single_package(package_name, output_dir)
                result.packages.append(package_result)

                if package_result.success:
                    logger.info(
                        f"Backed up {package_name} "
                        f"({len(package_result.files)} file(s), {format_size(package_result.size)})"
                    )
                else:
                    logger.error(f"Failed to back up {package_name}: {package_result.error}")

                pbar.update(1)

        logger.info(f"APK backup completed: {len(result.succeeded)}/{result.total} packages successful")

        return result

    def _backup_single_package(self, package_name: str, output_dir: Path) -> PackageBackupResult:
        """Backup a single package."""
        result = PackageBackupResult(package=package_name)

        try:
            result.remote_paths = self.package_manager.get_package_paths(package_name)
        except ADBError as e:
            result.error = str(e)
            return result

        package_dir = output_dir / package_name
        total = len(result.remote_paths)

        logger.debug(f"Extracting {total} APK file(s) for {package_name}")

        try:
            ensure_directory(package_dir)

            for index, remote_path in enumerate(result.remote_paths, start=1):
                apk_filename = PurePosixPath(remote_path).name
                if not apk_filename:
                    result.warnings.append(f"Failed to get APK file name from {remote_path!r}")
                    continue

                local_path = available_path(package_dir / apk_filename)

                if not self.puller.pull_file(remote_path, local_path):
                    result.warnings.append(f"Failed to extract {apk_filename}")
                    continue

                result.files.append(local_path)
                logger.debug(f"[{index}/{total}] {apk_filename}")
        except OSError as e:
            result.warnings.append(f"Failed to write {package_dir}: {e}")
            result.files.clear()

        if not result.files:
            result.error = "; ".join(result.warnings) or "No APK files extracted"
            # An empty package directory would count as backed up in later differentials
            shutil.rmtree(package_dir, ignore_errors=True)

        return result
