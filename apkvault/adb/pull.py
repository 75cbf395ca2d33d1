"""ADB file pulling utilities."""

from pathlib import Path

from .device import ADBDevice, ADBError
from ..util.logging import get_logger
from ..util.paths import ensure_directory

logger = get_logger(__name__)


class FilePuller:
    """Utility for pulling files from Android device via ADB."""

    def __init__(self, device: ADBDevice):
        self.device = device

    def pull_file(self, device_path: str, local_path: Path) -> bool:
        """Pull a single file from device to local storage."""
        try:
            ensure_directory(local_path.parent)

            logger.debug(f"Pulling {device_path} -> {local_path}")
            self.device.run_command(["pull", device_path, str(local_path)])

            if not local_path.exists():
                logger.warning(f"{local_path.name} was not created")
                return False

            return True

        except ADBError as e:
            logger.warning(f"Failed to extract {device_path}: {e}")
            # adb may leave a truncated file behind
            local_path.unlink(missing_ok=True)
            return False
