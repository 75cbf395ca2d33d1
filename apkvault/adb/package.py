"""ADB package management utilities."""

from pathlib import Path
from typing import List, Sequence

from .device import ADBDevice, ADBError
from ..util.logging import get_logger

logger = get_logger(__name__)

PACKAGE_PREFIX = "package:"


def parse_package_lines(output: str) -> List[str]:
    """Extract the values of ``package:``-tagged lines from pm output."""
    values = []
    for line in output.splitlines():
        if line.startswith(PACKAGE_PREFIX):
            value = line[len(PACKAGE_PREFIX):].strip()
            if value:
                values.append(value)
    return values


class PackageManager:
    """Utility for managing packages on Android device."""

    def __init__(self, device: ADBDevice):
        self.device = device

    def list_third_party_packages(self) -> List[str]:
        """List installed third-party packages, in the order pm reports them."""
        output = self.device.run_command(["shell", "pm", "list", "packages", "-3"])
        packages = parse_package_lines(output)

        logger.debug(f"Found {len(packages)} third-party packages")
        return packages

    def get_package_paths(self, package_name: str) -> List[str]:
        """Get the on-device paths of a package's installer files.

        Split packages report one path per APK (base plus splits).

        Raises:
            ADBError: If pm fails or reports no path
        """
        output = self.device.run_command(["shell", "pm", "path", package_name])
        paths = parse_package_lines(output)

        if not paths:
            raise ADBError("Package path not found")

        return paths

    def install(self, files: Sequence[Path]) -> str:
        """Install one APK, or a split set with install-multiple.

        Returns:
            Output of the install command

        Raises:
            ADBError: If the install fails
        """
        if not files:
            raise ValueError("No installer files given")

        if len(files) == 1:
            command = ["install", str(files[0])]
        else:
            command = ["install-multiple"] + [str(f) for f in files]

        output = self.device.run_command(command)

        # Older adb releases exit 0 and only print the failure
        if "Failure" in output:
            raise ADBError(f"ADB command failed: {' '.join(command)}\nstdout: {output}")

        return output
