"""Utility functions for time operations."""

from datetime import datetime
from typing import Optional

BACKUP_ID_FORMAT = "%Y%m%d%H%M%S"


def generate_backup_id(now: Optional[datetime] = None) -> str:
    """Generate a backup ID based on the local time."""
    if now is None:
        now = datetime.now()
    return now.strftime(BACKUP_ID_FORMAT)


def format_duration(seconds: float) -> str:
    """Format duration in human readable format."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = seconds / 60
        return f"{minutes:.1f}m"
    else:
        hours = seconds / 3600
        return f"{hours:.1f}h"
