"""Utility functions for zsync."""

from datetime import datetime

# =============================================================================
# Constants
# =============================================================================

# Default index file, relative to the working directory
DEFAULT_INDEX_FILE: str = "zsync.json"

# Default FTP settings
DEFAULT_HOSTNAME: str = "localhost"
DEFAULT_PORT: int = 21
DEFAULT_TIMEOUT: float = 60.0

# Maximum length of a dataset name qualifier and of a member name
NAME_SEGMENT_LENGTH: int = 8

# Reply text z/OS FTP sends when a member is stored into a missing PDS
MISSING_CONTAINER_MARKER: str = "requests a nonexistent partitioned data set"


# =============================================================================
# Timestamp utilities
# =============================================================================


def mtime_to_millis(mtime_ns: int) -> int:
    """Convert a nanosecond modification time to milliseconds since epoch."""
    return mtime_ns // 1_000_000


def format_timestamp(millis: int) -> str:
    """Format a millisecond timestamp for display.

    Args:
        millis: Milliseconds since epoch

    Returns:
        Local time formatted as ``dd.mm.yyyy HH:MM:SS``
    """
    return datetime.fromtimestamp(millis / 1000).strftime("%d.%m.%Y %H:%M:%S")


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"
