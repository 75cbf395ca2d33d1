"""Reinstalling packages from a backup."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List

from tqdm import tqdm

from ..adb.device import ADBDevice, ADBError
from ..adb.package import PackageManager
from ..backup.storage import BackupStorage
from ..util.logging import get_logger

logger = get_logger(__name__)


class InstallStatus(str, Enum):
    INSTALLED = "installed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class PackageInstallResult:
    """Outcome of installing one package directory."""

    package: str
    status: InstallStatus
    files: List[Path] = field(default_factory=list)
    message: str = ""


@dataclass
class InstallResult:
    """Outcome of installing a whole backup."""

    backup_dir: Path
    packages: List[PackageInstallResult] = field(default_factory=list)

    def count(self, status: InstallStatus) -> int:
        return sum(1 for p in self.packages if p.status == status)

    @property
    def installed(self) -> int:
        return self.count(InstallStatus.INSTALLED)

    @property
    def failed(self) -> int:
        return self.count(InstallStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(InstallStatus.SKIPPED)


class APKInstaller:
    """Installs the packages of a backup onto a device."""

    def __init__(
        self,
        device: ADBDevice,
        storage: BackupStorage,
        extensions: Iterable[str] = (".apk",),
        show_progress: bool = True
    ):
        self.device = device
        self.storage = storage
        self.extensions = tuple(ext.lower() for ext in extensions)
        self.show_progress = show_progress
        self.package_manager = PackageManager(device)

    def find_installer_files(self, package_dir: Path) -> List[Path]:
        """List the installer files of a package directory, sorted by name."""
        return sorted(
            p for p in package_dir.iterdir()
            if p.is_file() and p.suffix.lower() in self.extensions
        )

    def install_backup(self, backup_dir: Path) -> InstallResult:
        """Install every package stored in a backup."""
        package_dirs = self.storage.list_package_dirs(backup_dir)
        result = InstallResult(backup_dir=backup_dir)

        logger.info(f"Installing {len(package_dirs)} packages from {backup_dir.name}")

        with tqdm(
            total=len(package_dirs),
            desc="Installing APKs",
            unit="pkg",
            disable=not self.show_progress,
        ) as pbar:
            for package_dir in package_dirs:
                pbar.set_postfix_str(package_dir.name)
                result.packages.append(self.install_package(package_dir))
                pbar.update(1)

        logger.info(
            f"Install completed: {result.installed}/{len(package_dirs)} packages installed"
        )
        return result

    def install_package(self, package_dir: Path) -> PackageInstallResult:
        """Install the APK (or split APK set) found in one package directory."""
        try:
            files = self.find_installer_files(package_dir)
        except OSError as e:
            logger.error(f"Failed to read {package_dir}: {e}")
            return PackageInstallResult(
                package=package_dir.name,
                status=InstallStatus.FAILED,
                message=str(e),
            )

        if not files:
            logger.warning(f"No APKs found in {package_dir}")
            return PackageInstallResult(
                package=package_dir.name,
                status=InstallStatus.SKIPPED,
                message="No APKs found",
            )

        try:
            self.package_manager.install(files)
        except (ADBError, OSError) as e:
            logger.error(f"Failed to install from {package_dir.name}: {e}")
            return PackageInstallResult(
                package=package_dir.name,
                status=InstallStatus.FAILED,
                files=files,
                message=str(e),
            )

        logger.info(f"Installed package from {package_dir.name}")
        return PackageInstallResult(
            package=package_dir.name,
            status=InstallStatus.INSTALLED,
            files=files,
        )
