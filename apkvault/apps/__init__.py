"""Application backup and install."""

from .apk_backup import APKBackup, BackupResult, PackageBackupResult
from .apk_install import APKInstaller, InstallResult, InstallStatus, PackageInstallResult

__all__ = [
    "APKBackup",
    "BackupResult",
    "PackageBackupResult",
    "APKInstaller",
    "InstallResult",
    "InstallStatus",
    "PackageInstallResult",
]
