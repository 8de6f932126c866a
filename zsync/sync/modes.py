"""Sync modes."""

from enum import Enum


class SyncMode(str, Enum):
    """What a run does with changed files."""

    REPORT = "report"
    """Print changed files and advance the index without uploading"""

    UPLOAD = "upload"
    """Upload changed files"""

    @property
    def allows_upload(self) -> bool:
        return self is SyncMode.UPLOAD

    @classmethod
    def from_string(cls, value: str) -> "SyncMode":
        """Parse a mode name (case-insensitive).

        Raises:
            ValueError: If the name is unknown
        """
        normalized = value.strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        valid = ", ".join(mode.value for mode in cls)
        raise ValueError(f"Invalid sync mode '{value}'. Valid modes: {valid}")
