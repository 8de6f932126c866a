"""zsync - incremental synchronization of a directory tree to z/OS data sets."""

from .exceptions import (
    ZsyncAuthenticationError,
    ZsyncConfigError,
    ZsyncConnectionError,
    ZsyncDeleteError,
    ZsyncError,
    ZsyncIndexError,
    ZsyncTransferError,
    ZsyncUploadError,
)
from .transport import FTPTransport, RemoteTransport, StoreResult

__version__ = "0.1.0"

__all__ = [
    "FTPTransport",
    "RemoteTransport",
    "StoreResult",
    "ZsyncError",
    "ZsyncAuthenticationError",
    "ZsyncConfigError",
    "ZsyncConnectionError",
    "ZsyncDeleteError",
    "ZsyncIndexError",
    "ZsyncTransferError",
    "ZsyncUploadError",
]
