"""Directory scanning utilities for sync operations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..utils import mtime_to_millis

logger = logging.getLogger(__name__)


@dataclass
class LocalFile:
    """Represents a local file with metadata."""

    path: Path
    """Absolute path to the file"""

    relative_path: str
    """Relative path (using forward slashes for cross-platform compatibility)"""

    size: int
    """File size in bytes"""

    last_modified: int
    """Last modification time in milliseconds since epoch"""

    @classmethod
    def from_path(cls, file_path: Path, base_path: Path) -> "LocalFile":
        """Create LocalFile from a path.

        Args:
            file_path: Absolute path to the file
            base_path: Base path for calculating relative paths

        Returns:
            LocalFile instance
        """
        stat = file_path.stat()
        # Use as_posix() to ensure forward slashes on all platforms
        relative_path = file_path.relative_to(base_path).as_posix()

        return cls(
            path=file_path,
            relative_path=relative_path,
            size=stat.st_size,
            last_modified=mtime_to_millis(stat.st_mtime_ns),
        )


class DirectoryScanner:
    """Scans directories and builds file lists.

    Only regular files are returned. Exclusion is not applied here;
    the change-set calculator needs to see excluded files to tell them
    apart from removed ones.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> files = scanner.scan_local(Path("/sync/folder"))
        >>> for f in files:
        ...     print(f.relative_path)
    """

    def scan_local(
        self, directory: Path, base_path: Optional[Path] = None
    ) -> list[LocalFile]:
        """Recursively scan a local directory.

        Args:
            directory: Directory to scan
            base_path: Base path for calculating relative paths (defaults to directory)

        Returns:
            List of LocalFile objects in traversal order
        """
        if base_path is None:
            base_path = directory

        files: list[LocalFile] = []

        try:
            for item in sorted(directory.iterdir()):
                if item.is_symlink() and item.is_dir():
                    continue
                if item.is_file():
                    try:
                        files.append(LocalFile.from_path(item, base_path))
                    except OSError as e:
                        logger.debug(f"Skipping unreadable file {item}: {e}")
                        continue
                elif item.is_dir():
                    files.extend(self.scan_local(item, base_path))
        except PermissionError as e:
            # Skip directories we can't read
            logger.warning(f"Permission denied: {e}")

        return files
