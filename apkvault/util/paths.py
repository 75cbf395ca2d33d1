"""Utility functions for path operations."""

from pathlib import Path
from typing import List

from ..util.logging import get_logger

logger = get_logger(__name__)


def ensure_directory(path: Path) -> Path:
    """Ensure directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_filename(filename: str) -> str:
    """Create a safe filename by removing/replacing problematic characters."""
    replacements = {
        "/": "_",
        "\\": "_",
        ":": "_",
        "*": "_",
        "?": "_",
        '"': "_",
        "<": "_",
        ">": "_",
        "|": "_",
        "\n": "_",
        "\r": "_",
        "\t": "_",
    }

    safe_name = filename
    for old, new in replacements.items():
        safe_name = safe_name.replace(old, new)

    # Remove leading/trailing whitespace and dots
    safe_name = safe_name.strip(" .")

    if not safe_name:
        safe_name = "unknown"

    return safe_name


def available_path(path: Path) -> Path:
    """Return ``path`` or the first ``<stem>_<n><suffix>`` sibling that does not exist.

    Only the last extension is kept apart, so ``base.apk`` becomes
    ``base_1.apk`` and ``archive.tar.gz`` becomes ``archive.tar_1.gz``.
    """
    if not path.exists():
        return path

    n = 1
    while True:
        candidate = path.with_name(f"{path.stem}_{n}{path.suffix}")
        if not candidate.exists():
            logger.debug(f"{path.name} already exists, using {candidate.name}")
            return candidate
        n += 1


def list_subdirectories(directory: Path) -> List[Path]:
    """List the immediate subdirectories of a directory, sorted by name."""
    if not directory.is_dir():
        return []

    return sorted((d for d in directory.iterdir() if d.is_dir()), key=lambda d: d.name)


def format_size(size_bytes: int) -> str:
    """Format file size in human readable format."""
    if size_bytes == 0:
        return "0 B"

    size_names = ["B", "KB", "MB", "GB", "TB"]
    size = float(size_bytes)
    i = 0
    while size >= 1024.0 and i < len(size_names) - 1:
        size /= 1024.0
        i += 1

    return f"{size:.1f} {size_names[i]}"
