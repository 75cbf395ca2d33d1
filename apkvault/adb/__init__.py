"""ADB module initialization."""

from .device import ADBDevice, ADBError, check_adb_available, list_devices, parse_devices_output
from .package import PackageManager, parse_package_lines
from .pull import FilePuller

__all__ = [
    # device
    "ADBDevice",
    "ADBError",
    "check_adb_available",
    "list_devices",
    "parse_devices_output",
    # pull
    "FilePuller",
    # package
    "PackageManager",
    "parse_package_lines",
]
