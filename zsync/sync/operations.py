"""Remote file operations with create-on-demand of missing data sets."""

import logging
from typing import Optional

from ..exceptions import ZsyncDeleteError, ZsyncUploadError
from ..output import OutputFormatter
from ..transport import RemoteTransport, StoreResult
from .naming import container_of, map_path, relative_container
from .pair import SyncPair
from .scanner import LocalFile

logger = logging.getLogger(__name__)


class SyncOperations:
    """Uploads and deletes single members through a transport."""

    def __init__(
        self,
        transport: RemoteTransport,
        output: Optional[OutputFormatter] = None,
    ):
        """Initialize sync operations.

        Args:
            transport: Connected remote transport
            output: Output formatter for per-file messages
        """
        self.transport = transport
        self.output = output or OutputFormatter()

    def upload_file(self, local_file: LocalFile, pair: SyncPair) -> bool:
        """Upload a local file to its member.

        When the target data set does not exist it is created, with the
        allocation parameters configured for it, and the store is retried
        once. The outcome of the retry is final.

        Args:
            local_file: File to upload
            pair: Sync pair the file belongs to

        Returns:
            True if the data set had to be created first

        Raises:
            ZsyncUploadError: If the member could not be stored
        """
        path = local_file.relative_path
        remote_name = map_path(path, pair.remote)
        container = container_of(remote_name)

        self.output.info(f"Uploading '{path}' file to '{container}' data set")
        result = self._store(local_file, remote_name)
        if result is StoreResult.STORED:
            return False
        if result is not StoreResult.CONTAINER_MISSING:
            raise ZsyncUploadError(self.transport.last_error(), path=path)

        self.output.info("Upload has failed because data set does not exist")
        self.create_container(container, pair, path)

        self.output.info(f"Uploading '{path}' file to '{container}' data set")
        if self._store(local_file, remote_name) is not StoreResult.STORED:
            raise ZsyncUploadError(self.transport.last_error(), path=path)
        return True

    def create_container(self, container: str, pair: SyncPair, path: str) -> None:
        """Create a data set, applying its allocation parameters if any.

        Raises:
            ZsyncUploadError: If the parameters are rejected or creation fails
        """
        relative = relative_container(container, pair.remote)
        parameters = pair.allocation_parameters_for(relative) if relative else ""

        if parameters:
            self.output.info(
                f"Creating '{container}' data set with parameters '{parameters}'"
            )
            if not self.transport.set_allocation_parameters(parameters):
                raise ZsyncUploadError(self.transport.last_error(), path=path)
        else:
            self.output.info(f"Creating '{container}' data set")

        if not self.transport.create_container(container):
            raise ZsyncUploadError(self.transport.last_error(), path=path)

    def delete_remote(self, relative_path: str, pair: SyncPair) -> None:
        """Delete the member a removed local file was stored in.

        Raises:
            ZsyncDeleteError: If the member could not be deleted
        """
        remote_name = map_path(relative_path, pair.remote)
        container = container_of(remote_name)

        self.output.info(f"Deleting '{relative_path}' file from '{container}' data set")
        if not self.transport.delete(remote_name):
            raise ZsyncDeleteError(self.transport.last_error(), path=relative_path)

    def _store(self, local_file: LocalFile, remote_name: str) -> StoreResult:
        # Opened per attempt; a failed store may have consumed the stream
        try:
            with open(local_file.path, "rb") as stream:
                return self.transport.store(remote_name, stream)
        except OSError as e:
            raise ZsyncUploadError(
                f"Cannot read '{local_file.path}': {e}",
                path=local_file.relative_path,
            ) from e
