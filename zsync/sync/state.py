"""Index management for incremental sync.

The index remembers the modification time of every file at the moment it
was last uploaded (or reported), so that the next run only has to deal
with files that are new, newer or gone.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..exceptions import ZsyncIndexError

logger = logging.getLogger(__name__)

INDEX_FORMAT_VERSION = 1


@dataclass
class IndexEntry:
    """Last synchronized state of a single file."""

    path: str
    """Relative path (using forward slashes)"""

    last_modified: int
    """Modification time in milliseconds since epoch"""

    def to_dict(self) -> dict:
        """Convert entry to dictionary for JSON serialization."""
        return {"path": self.path, "last_modified": self.last_modified}

    @classmethod
    def from_dict(cls, data: dict) -> "IndexEntry":
        """Create IndexEntry from dictionary."""
        return cls(path=data["path"], last_modified=int(data["last_modified"]))


class SyncIndex:
    """Mapping from relative path to IndexEntry.

    ``dirty`` is set once an entry has been added, replaced or removed.
    """

    def __init__(self, entries: Optional[dict[str, IndexEntry]] = None):
        self._entries: dict[str, IndexEntry] = dict(entries or {})
        self.dirty = False

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(list(self._entries.values()))

    def get(self, path: str) -> Optional[IndexEntry]:
        return self._entries.get(path)

    def paths(self) -> list[str]:
        """Return all indexed paths, sorted."""
        return sorted(self._entries)

    def update(self, path: str, last_modified: int) -> IndexEntry:
        """Insert or replace the entry for ``path``."""
        entry = IndexEntry(path=path, last_modified=last_modified)
        self._entries[path] = entry
        self.dirty = True
        return entry

    def remove(self, path: str) -> bool:
        """Remove the entry for ``path``.

        Returns:
            True if an entry was removed, False if none existed
        """
        if self._entries.pop(path, None) is None:
            return False
        self.dirty = True
        return True

    def to_dict(self) -> dict:
        """Convert index to dictionary for JSON serialization."""
        return {
            "version": INDEX_FORMAT_VERSION,
            "entries": [self._entries[path].to_dict() for path in self.paths()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SyncIndex":
        """Create SyncIndex from dictionary."""
        entries = {}
        for item in data.get("entries", []):
            entry = IndexEntry.from_dict(item)
            entries[entry.path] = entry
        return cls(entries)


class IndexManager:
    """Loads and saves the index file.

    The file is plain JSON with one object per entry, sorted by path,
    so that it stays readable and diffs cleanly.
    """

    def __init__(self, index_file: Path):
        """Initialize index manager.

        Args:
            index_file: Location of the index file
        """
        self.index_file = Path(index_file)

    def exists(self) -> bool:
        return self.index_file.exists()

    def load(self) -> SyncIndex:
        """Load the index.

        Returns:
            The stored index, or an empty one if the file does not exist

        Raises:
            ZsyncIndexError: If the file exists but cannot be parsed
        """
        if not self.index_file.exists():
            logger.debug(f"No index found at {self.index_file}")
            return SyncIndex()

        try:
            with open(self.index_file, encoding="utf-8") as f:
                data = json.load(f)
            index = SyncIndex.from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ZsyncIndexError(
                f"Invalid index file '{self.index_file}': {e}"
            ) from e
        except OSError as e:
            raise ZsyncIndexError(
                f"Cannot read index file '{self.index_file}': {e}"
            ) from e

        logger.debug(f"Loaded index with {len(index)} entries from {self.index_file}")
        return index

    def save(self, index: SyncIndex) -> None:
        """Write the index, replacing any previous file.

        Args:
            index: Index to persist
        """
        tmp_file = self.index_file.with_name(self.index_file.name + ".tmp")
        try:
            self.index_file.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_file, "w", encoding="utf-8") as f:
                json.dump(index.to_dict(), f, indent=2)
                f.write("\n")
            tmp_file.replace(self.index_file)
        except OSError as e:
            raise ZsyncIndexError(
                f"Cannot write index file '{self.index_file}': {e}"
            ) from e
        logger.debug(f"Saved index with {len(index)} entries to {self.index_file}")
