"""Package selection for full and differential backups."""

from typing import Iterable, List, Optional


def select_packages(
    device_packages: Iterable[str],
    base_packages: Optional[Iterable[str]] = None
) -> List[str]:
    """Return the device packages missing from the base backup.

    Device order is preserved and duplicates are dropped. Without a base
    every device package is selected.
    """
    excluded = set(base_packages or ())
    selected = []

    for package in device_packages:
        if package not in excluded:
            selected.append(package)
            excluded.add(package)

    return selected
