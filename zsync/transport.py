"""Remote session transport for z/OS FTP servers.

Data set names are always sent fully qualified (in single quotes), so the
server's current working prefix never leaks into the target name.
"""

from __future__ import annotations

import ftplib
import logging
from enum import Enum
from typing import BinaryIO, Callable, Protocol

from .exceptions import ZsyncAuthenticationError, ZsyncConnectionError
from .utils import DEFAULT_PORT, DEFAULT_TIMEOUT, MISSING_CONTAINER_MARKER

logger = logging.getLogger(__name__)


class StoreResult(str, Enum):
    """Outcome of storing a member."""

    STORED = "stored"
    """Member written"""

    CONTAINER_MISSING = "container_missing"
    """The partitioned data set does not exist yet"""

    FAILED = "failed"
    """Any other failure; see ``last_error()``"""


class RemoteTransport(Protocol):
    """Session primitives the sync engine needs from a remote repository."""

    def connect(self, host: str) -> None: ...

    def login(self, user: str, password: str) -> None: ...

    def store(self, remote_name: str, stream: BinaryIO) -> StoreResult: ...

    def create_container(self, name: str) -> bool: ...

    def set_allocation_parameters(self, parameters: str) -> bool: ...

    def delete(self, remote_name: str) -> bool: ...

    def last_error(self) -> str: ...

    def is_connected(self) -> bool: ...

    def logout(self) -> None: ...


def is_missing_container_reply(reply: str) -> bool:
    """Check whether a reply reports a store into a nonexistent PDS."""
    return MISSING_CONTAINER_MARKER in reply


def quote(name: str) -> str:
    """Return a fully qualified data set name for an FTP command."""
    return f"'{name}'"


class FTPTransport:
    """z/OS FTP implementation of RemoteTransport built on ftplib.

    ``connect`` and ``login`` raise on failure. File operations return a
    result and keep the server reply for ``last_error()``.
    """

    def __init__(
        self,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        binary: bool = False,
        ftp_factory: Callable[[], ftplib.FTP] = ftplib.FTP,
    ):
        """Initialize FTP transport.

        Args:
            port: FTP control port
            timeout: Socket timeout in seconds
            binary: Transfer members as binary (TYPE I) instead of text (TYPE A)
            ftp_factory: Callable creating the ftplib.FTP instance
        """
        self.port = port
        self.timeout = timeout
        self.binary = binary
        self._ftp_factory = ftp_factory
        self._ftp: ftplib.FTP | None = None
        self._last_reply = ""

    def _require_ftp(self) -> ftplib.FTP:
        if self._ftp is None:
            raise ZsyncConnectionError("Not connected")
        return self._ftp

    def connect(self, host: str) -> None:
        """Open the control connection.

        Raises:
            ZsyncConnectionError: If the host cannot be reached
        """
        ftp = self._ftp_factory()
        try:
            self._last_reply = ftp.connect(host, self.port, timeout=self.timeout)
        except ftplib.all_errors as e:
            self._last_reply = str(e)
            raise ZsyncConnectionError(f"Cannot connect to '{host}': {e}") from e
        logger.debug(f"Connected: {self._last_reply}")
        self._ftp = ftp

    def login(self, user: str, password: str) -> None:
        """Authenticate the session.

        Raises:
            ZsyncAuthenticationError: If the credentials are rejected
            ZsyncConnectionError: If the connection fails meanwhile
        """
        ftp = self._require_ftp()
        try:
            self._last_reply = ftp.login(user, password)
        except ftplib.error_perm as e:
            self._last_reply = str(e)
            raise ZsyncAuthenticationError(f"Login failed for '{user}': {e}") from e
        except ftplib.all_errors as e:
            self._last_reply = str(e)
            raise ZsyncConnectionError(f"Login failed for '{user}': {e}") from e
        logger.debug(f"Logged in: {self._last_reply}")

    def store(self, remote_name: str, stream: BinaryIO) -> StoreResult:
        """Store a member from a binary stream."""
        ftp = self._require_ftp()
        command = f"STOR {quote(remote_name)}"
        try:
            if self.binary:
                self._last_reply = ftp.storbinary(command, stream)
            else:
                self._last_reply = ftp.storlines(command, stream)
        except ftplib.all_errors as e:
            self._last_reply = str(e)
            logger.debug(f"{command} failed: {e}")
            if is_missing_container_reply(self._last_reply):
                return StoreResult.CONTAINER_MISSING
            return StoreResult.FAILED
        return StoreResult.STORED

    def create_container(self, name: str) -> bool:
        """Create a partitioned data set."""
        return self._run(lambda ftp: ftp.mkd(quote(name)))

    def set_allocation_parameters(self, parameters: str) -> bool:
        """Send SITE parameters used by the next allocation."""
        return self._run(lambda ftp: ftp.sendcmd(f"SITE {parameters}"))

    def delete(self, remote_name: str) -> bool:
        """Delete a member."""
        return self._run(lambda ftp: ftp.delete(quote(remote_name)))

    def _run(self, operation: Callable[[ftplib.FTP], str]) -> bool:
        ftp = self._require_ftp()
        try:
            self._last_reply = operation(ftp)
        except ftplib.all_errors as e:
            self._last_reply = str(e)
            logger.debug(f"FTP command failed: {e}")
            return False
        return True

    def last_error(self) -> str:
        """Text of the last server reply."""
        return self._last_reply

    def is_connected(self) -> bool:
        return self._ftp is not None and self._ftp.sock is not None

    def logout(self) -> None:
        """Send QUIT and close the connection.

        Raises:
            ZsyncConnectionError: If QUIT fails; the socket is closed anyway
        """
        if self._ftp is None:
            return
        ftp, self._ftp = self._ftp, None
        try:
            self._last_reply = ftp.quit()
        except ftplib.all_errors as e:
            self._last_reply = str(e)
            ftp.close()
            raise ZsyncConnectionError(f"Logout failed: {e}") from e
