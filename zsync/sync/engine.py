"""Core sync engine for executing sync runs."""

import logging
import time
from typing import Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from ..exceptions import ZsyncError
from ..output import OutputFormatter
from ..transport import RemoteTransport
from ..utils import format_timestamp
from .comparator import ChangeSet, ChangeSetCalculator
from .operations import SyncOperations
from .pair import RemoteHost, SyncPair
from .scanner import DirectoryScanner, LocalFile
from .state import SyncIndex

logger = logging.getLogger(__name__)


class SyncEngine:
    """Core sync engine that orchestrates one sync run.

    A run scans the local root, computes the change set against the
    index and replays it on the remote host: changed files first, then
    removals. The first unexpected failure aborts the run; the index
    then reflects exactly the files processed before it. The remote
    session is closed on every path out of the run.
    """

    def __init__(
        self,
        transport: RemoteTransport,
        host: RemoteHost,
        output: Optional[OutputFormatter] = None,
    ):
        """Initialize sync engine.

        Args:
            transport: Remote session transport (not yet connected)
            host: Host and credentials for the session
            output: Output formatter for displaying progress/status
        """
        self.transport = transport
        self.host = host
        self.output = output or OutputFormatter()
        self.operations = SyncOperations(transport, self.output)

    def sync_pair(self, pair: SyncPair, index: SyncIndex) -> dict:
        """Run a full sync of a sync pair.

        Args:
            pair: Sync pair to synchronize
            index: Index from the previous run, updated in place

        Returns:
            Dictionary with sync statistics

        Examples:
            >>> engine = SyncEngine(FTPTransport(), RemoteHost("zos", "user", "pw"))
            >>> pair = SyncPair(Path("src"), "USER.SRC", SyncMode.UPLOAD)
            >>> stats = engine.sync_pair(pair, IndexManager(Path("zsync.json")).load())
        """
        change_set = self.plan(pair, index)
        return self.execute(change_set, index, pair)

    def plan(self, pair: SyncPair, index: SyncIndex) -> ChangeSet:
        """Scan the local root and compute the change set.

        Raises:
            ValueError: If the local root is missing or not a directory
        """
        if not pair.local.exists():
            raise ValueError(f"Local directory does not exist: {pair.local}")
        if not pair.local.is_dir():
            raise ValueError(f"Local path is not a directory: {pair.local}")

        logger.info(f"Processing '{pair.local}' directory files")
        local_files = self._scan_local_files(pair)

        calculator = ChangeSetCalculator(
            exclude_paths=pair.exclude,
            exclude_removals=pair.exclude_removals,
            local_root=pair.local,
        )
        return calculator.compute(local_files, index)

    def _scan_local_files(self, pair: SyncPair) -> list[LocalFile]:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            disable=self.output.quiet or self.output.json_output,
        ) as progress:
            scan_start = time.time()
            task = progress.add_task("Scanning local directory...", total=None)
            local_files = DirectoryScanner().scan_local(pair.local)
            progress.update(task, description=f"Found {len(local_files)} local file(s)")
            logger.debug(
                f"Local scan took {time.time() - scan_start:.2f}s "
                f"for {len(local_files)} files"
            )
        return local_files

    def execute(self, change_set: ChangeSet, index: SyncIndex, pair: SyncPair) -> dict:
        """Replay a change set on the remote host.

        Args:
            change_set: Files to upload and paths to delete
            index: Index updated in place as operations succeed
            pair: Sync pair configuration

        Returns:
            Dictionary with sync statistics

        Raises:
            ZsyncConnectionError: If the host cannot be reached
            ZsyncAuthenticationError: If the login is rejected
            ZsyncUploadError: If a member cannot be stored
            ZsyncDeleteError: If a member cannot be deleted
        """
        stats = self._create_empty_stats()

        if change_set.is_empty:
            self.output.info("No files have been added, changed or removed")
            return stats

        logger.info(f"Connecting to '{self.host.hostname}' host")
        self.transport.connect(self.host.hostname)
        try:
            logger.info(
                f"Logging in '{self.host.hostname}' host "
                f"as '{self.host.username}' user"
            )
            self.transport.login(self.host.username, self.host.password)

            for local_file in change_set.changed:
                self._process_changed_file(local_file, index, pair, stats)

            for path in change_set.removed:
                self.operations.delete_remote(path, pair)
                index.remove(path)
                stats["deletes"] += 1
        finally:
            self._close_session()

        self._display_summary(stats)
        return stats

    def _process_changed_file(
        self,
        local_file: LocalFile,
        index: SyncIndex,
        pair: SyncPair,
        stats: dict,
    ) -> None:
        if pair.sync_mode.allows_upload:
            if self.operations.upload_file(local_file, pair):
                stats["created"] += 1
            stats["uploads"] += 1
        else:
            self.output.info(
                f"'{local_file.relative_path}' file changed on "
                f"{format_timestamp(local_file.last_modified)}"
            )
            stats["changes"] += 1

        index.update(local_file.relative_path, local_file.last_modified)

    def _close_session(self) -> None:
        """Log out if still connected; failures only produce a warning."""
        if not self.transport.is_connected():
            return
        logger.info(f"Logging out '{self.host.hostname}' host")
        try:
            self.transport.logout()
        except (ZsyncError, OSError) as e:
            self.output.warning(f"Logout from '{self.host.hostname}' failed: {e}")

    def _create_empty_stats(self) -> dict:
        """Create an empty statistics dictionary.

        Returns:
            Dictionary with zero counts for all stat categories
        """
        return {
            "uploads": 0,
            "changes": 0,
            "created": 0,
            "deletes": 0,
        }

    def _display_summary(self, stats: dict) -> None:
        if self.output.quiet:
            return

        self.output.print("")
        self.output.success("Sync complete!")
        if stats["uploads"]:
            self.output.info(f"  Uploaded: {stats['uploads']}")
        if stats["created"]:
            self.output.info(f"  Data sets created: {stats['created']}")
        if stats["changes"]:
            self.output.info(f"  Changed (not uploaded): {stats['changes']}")
        if stats["deletes"]:
            self.output.info(f"  Deleted: {stats['deletes']}")
