"""Configuration defaults for zsync.

Connection defaults are resolved from environment variables when the
command line does not set them.
"""

import getpass
import os
from pathlib import Path

from .utils import DEFAULT_HOSTNAME, DEFAULT_INDEX_FILE


class Config:
    """Resolves default settings from the environment."""

    @property
    def hostname(self) -> str:
        """FTP host (``ZSYNC_HOST``, default ``localhost``)."""
        return os.environ.get("ZSYNC_HOST") or DEFAULT_HOSTNAME

    @property
    def username(self) -> str:
        """FTP user (``ZSYNC_USER``, default the current login name)."""
        return os.environ.get("ZSYNC_USER") or getpass.getuser()

    @property
    def index_file(self) -> Path:
        """Index file (``ZSYNC_INDEX_FILE``, default ``zsync.json``)."""
        return Path(os.environ.get("ZSYNC_INDEX_FILE") or DEFAULT_INDEX_FILE)


config = Config()
