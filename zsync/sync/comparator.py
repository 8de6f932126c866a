"""Change detection against the sync index."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .scanner import LocalFile
from .state import SyncIndex

logger = logging.getLogger(__name__)


@dataclass
class ChangeSet:
    """Files to upload and paths to delete in one run."""

    changed: list[LocalFile] = field(default_factory=list)
    """New or modified files, in traversal order"""

    removed: list[str] = field(default_factory=list)
    """Indexed relative paths that no longer exist locally"""

    @property
    def is_empty(self) -> bool:
        return not self.changed and not self.removed


def is_excluded(relative_path: str, exclude_paths: Iterable[str]) -> bool:
    """Check whether a relative path starts with any exclusion prefix."""
    return any(relative_path.startswith(prefix) for prefix in exclude_paths)


def _still_on_disk(path: Path) -> bool:
    # Anything but a definite "not found" keeps the file
    try:
        path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError:
        return True
    return True


class ChangeSetCalculator:
    """Compares a local file snapshot with the index.

    A file is changed when it is not excluded and either has no index
    entry or is strictly newer than it. Equal timestamps count as
    unchanged even if the content differs.

    An indexed path is removed when it is absent from the snapshot and,
    given a ``local_root``, no longer exists on disk. A file the scanner
    could not reach is therefore never reported as removed.
    With ``exclude_removals`` (the default) excluded paths are never
    reported as removed, so excluding a directory leaves its members on
    the remote side. Without it, removal detection ignores exclusions.
    """

    def __init__(
        self,
        exclude_paths: Sequence[str] = (),
        exclude_removals: bool = True,
        local_root: Optional[Path] = None,
    ):
        """Initialize change-set calculator.

        Args:
            exclude_paths: Relative path prefixes to leave out of the sync
            exclude_removals: Whether exclusions also hide removed paths
            local_root: Directory the snapshot was taken from
        """
        self.exclude_paths = list(exclude_paths)
        self.exclude_removals = exclude_removals
        self.local_root = Path(local_root) if local_root is not None else None

    def compute(self, local_files: Sequence[LocalFile], index: SyncIndex) -> ChangeSet:
        """Compute the change set for a snapshot.

        Args:
            local_files: All regular files under the local root
            index: Index from the previous run

        Returns:
            ChangeSet with changed files and removed paths
        """
        change_set = ChangeSet()
        present: set[str] = set()

        for local_file in local_files:
            path = local_file.relative_path
            present.add(path)

            if is_excluded(path, self.exclude_paths):
                logger.debug(f"Excluded: {path}")
                continue

            entry = index.get(path)
            if entry is None or local_file.last_modified > entry.last_modified:
                change_set.changed.append(local_file)

        for path in index.paths():
            if path in present:
                continue
            if self.exclude_removals and is_excluded(path, self.exclude_paths):
                logger.debug(f"Excluded removal: {path}")
                continue
            if self.local_root is not None and _still_on_disk(self.local_root / path):
                logger.warning(f"Not scanned but still present, keeping: {path}")
                continue
            change_set.removed.append(path)

        logger.debug(
            f"Change set: {len(change_set.changed)} changed, "
            f"{len(change_set.removed)} removed"
        )
        return change_set
