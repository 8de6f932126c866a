"""Sync engine for zsync - incremental upload of a directory tree to PDS members."""

from .comparator import ChangeSet, ChangeSetCalculator, is_excluded
from .config import load_allocation_parameters, parse_allocation_parameters
from .engine import SyncEngine
from .modes import SyncMode
from .naming import (
    container_of,
    map_path,
    member_name,
    normalize_remote_root,
    relative_container,
)
from .operations import SyncOperations
from .pair import RemoteHost, SyncPair
from .scanner import DirectoryScanner, LocalFile
from .state import IndexEntry, IndexManager, SyncIndex

__all__ = [
    "SyncEngine",
    "SyncMode",
    "SyncPair",
    "RemoteHost",
    "SyncOperations",
    "ChangeSet",
    "ChangeSetCalculator",
    "is_excluded",
    "DirectoryScanner",
    "LocalFile",
    "IndexEntry",
    "IndexManager",
    "SyncIndex",
    "map_path",
    "member_name",
    "normalize_remote_root",
    "container_of",
    "relative_container",
    "load_allocation_parameters",
    "parse_allocation_parameters",
]
