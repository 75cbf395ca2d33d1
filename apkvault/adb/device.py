"""ADB device management and communication."""

import subprocess
from typing import List, Optional

from ..util.logging import get_logger

logger = get_logger(__name__)


class ADBError(Exception):
    """ADB command execution error."""
    pass


class ADBDevice:
    """Represents an ADB-connected Android device."""

    def __init__(self, serial: str, adb_path: str = "adb", timeout: Optional[int] = None):
        self.serial = serial
        self.adb_path = adb_path
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"ADBDevice(serial={self.serial!r})"

    def run_command(self, command: List[str]) -> str:
        """Run an ADB command against this device and return its stdout.

        Blocks until the process exits (or ``timeout`` seconds pass, when set).

        Raises:
            ADBError: If adb is missing, times out or exits non-zero
        """
        cmd = [self.adb_path, "-s", self.serial] + command

        try:
            logger.debug(f"Running ADB command: {' '.join(cmd)}")
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=True
            )
            return result.stdout.strip()
        except subprocess.CalledProcessError as e:
            error_msg = _format_failure(cmd, e.stdout, e.stderr)
            logger.debug(error_msg)
            raise ADBError(error_msg) from e
        except subprocess.TimeoutExpired as e:
            error_msg = f"ADB command timed out: {' '.join(cmd)}"
            logger.debug(error_msg)
            raise ADBError(error_msg) from e
        except FileNotFoundError as e:
            raise ADBError(f"ADB not found at {self.adb_path!r}") from e


def _format_failure(cmd: List[str], stdout: Optional[str], stderr: Optional[str]) -> str:
    lines = [f"ADB command failed: {' '.join(cmd)}"]
    if stdout and stdout.strip():
        lines.append(f"stdout: {stdout.strip()}")
    if stderr and stderr.strip():
        lines.append(f"stderr: {stderr.strip()}")
    return "\n".join(lines)


def check_adb_available(adb_path: str = "adb") -> bool:
    """Check if ADB is available and working."""
    try:
        result = subprocess.run(
            [adb_path, "version"],
            capture_output=True,
            text=True,
        )
        return result.returncode == 0
    except (FileNotFoundError, PermissionError):
        return False


def parse_devices_output(output: str) -> List[str]:
    """Return the serials of ready devices from ``adb devices`` output."""
    serials = []
    lines = output.strip().split("\n")[1:]  # Skip header

    for line in lines:
        parts = line.strip().split("\t")
        if len(parts) >= 2 and parts[1].strip() == "device":
            serials.append(parts[0].strip())

    return serials


def list_devices(adb_path: str = "adb", timeout: Optional[int] = None) -> List[ADBDevice]:
    """List all connected ADB devices."""
    try:
        result = subprocess.run(
            [adb_path, "devices"],
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=True
        )
    except subprocess.CalledProcessError as e:
        raise ADBError(f"Failed to list devices: {e.stderr}") from e
    except subprocess.TimeoutExpired as e:
        raise ADBError("Timed out listing devices") from e
    except FileNotFoundError as e:
        raise ADBError("ADB is not available or not in PATH") from e

    return [ADBDevice(serial, adb_path, timeout) for serial in parse_devices_output(result.stdout)]
