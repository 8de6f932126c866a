"""Custom exceptions for zsync."""

from typing import Optional


class ZsyncError(Exception):
    """Base exception for zsync errors."""

    pass


class ZsyncConnectionError(ZsyncError):
    """Raised when the remote host cannot be reached."""

    pass


class ZsyncAuthenticationError(ZsyncError):
    """Raised when the remote host rejects the credentials."""

    pass


class ZsyncConfigError(ZsyncError):
    """Raised when configuration is missing or malformed."""

    pass


class ZsyncIndexError(ZsyncError):
    """Raised when the index file cannot be read."""

    pass


class ZsyncTransferError(ZsyncError):
    """Base class for failed remote file operations.

    The remote reply text is kept verbatim in ``detail`` and is also
    the exception message.
    """

    def __init__(self, detail: str, path: Optional[str] = None):
        self.detail = detail
        self.path = path
        super().__init__(detail)


class ZsyncUploadError(ZsyncTransferError):
    """Raised when a member cannot be stored on the remote host."""

    pass


class ZsyncDeleteError(ZsyncTransferError):
    """Raised when a member cannot be deleted from the remote host."""

    pass
