"""CLI interface for zsync."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from . import __version__
from .config import config
from .exceptions import ZsyncError, ZsyncIndexError
from .output import OutputFormatter
from .sync import (
    ChangeSetCalculator,
    DirectoryScanner,
    IndexManager,
    RemoteHost,
    SyncEngine,
    SyncIndex,
    SyncMode,
    SyncPair,
    container_of,
    load_allocation_parameters,
    map_path,
    normalize_remote_root,
)
from .transport import FTPTransport
from .utils import DEFAULT_PORT, DEFAULT_TIMEOUT, format_size, format_timestamp

logger = logging.getLogger(__name__)


def _load_index(manager: IndexManager, out: OutputFormatter, ctx: Any) -> SyncIndex:
    if manager.exists():
        logger.info(f"Loading index from '{manager.index_file}' file")
    try:
        return manager.load()
    except ZsyncIndexError as e:
        out.error(str(e))
        ctx.exit(1)
        raise  # Unreachable, but helps type checker


def _build_pair(
    ctx: Any,
    out: OutputFormatter,
    local_root: Path,
    remote_root: str,
    exclude_path: tuple[str, ...],
    include_excluded_removals: bool,
    upload: bool = False,
    datasets_options: Optional[Path] = None,
) -> SyncPair:
    try:
        allocation_parameters = (
            load_allocation_parameters(datasets_options) if datasets_options else {}
        )
        return SyncPair(
            local=local_root,
            remote=remote_root,
            sync_mode=SyncMode.UPLOAD if upload else SyncMode.REPORT,
            exclude=list(exclude_path),
            exclude_removals=not include_excluded_removals,
            allocation_parameters=allocation_parameters,
        )
    except (ZsyncError, ValueError) as e:
        out.error(str(e))
        ctx.exit(1)
        raise  # Unreachable, but helps type checker


@click.group()
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(version=__version__, prog_name="zsync")
@click.pass_context
def main(ctx: Any, quiet: bool, json: bool, verbose: bool) -> None:
    """zsync - Incrementally synchronize a directory tree to z/OS data sets."""
    ctx.ensure_object(dict)
    ctx.obj["out"] = OutputFormatter(json_output=json, quiet=quiet)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("zsync").setLevel(logging.DEBUG)
    else:
        # Set default logging level to WARNING to suppress debug/info messages
        logging.basicConfig(level=logging.WARNING)


@main.command()
@click.option(
    "--hostname", "-s", help="FTP hostname (default: $ZSYNC_HOST or localhost)"
)
@click.option(
    "--username", "-u", help="FTP username (default: $ZSYNC_USER or login name)"
)
@click.option(
    "--password",
    "-p",
    envvar="ZSYNC_PASSWORD",
    required=True,
    help="FTP password",
)
@click.option(
    "--local-root",
    "-l",
    required=True,
    type=click.Path(path_type=Path),
    help="Local root directory",
)
@click.option("--remote-root", "-r", required=True, help="Remote root data set prefix")
@click.option(
    "--exclude-path",
    "-e",
    multiple=True,
    help="Exclude relative path prefix from the synchronization (repeatable)",
)
@click.option(
    "--datasets-options",
    "-d",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Data sets allocation parameters file",
)
@click.option(
    "--index-file",
    "-x",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Index file (default: $ZSYNC_INDEX_FILE or zsync.json)",
)
@click.option(
    "--keep-index",
    "-i",
    is_flag=True,
    help="Do not write the updated index back to the index file",
)
@click.option(
    "--upload",
    "-o",
    is_flag=True,
    help="Upload changed files (default: only report them)",
)
@click.option("--port", type=int, default=DEFAULT_PORT, show_default=True)
@click.option(
    "--timeout",
    type=float,
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Socket timeout in seconds",
)
@click.option("--binary", is_flag=True, help="Transfer files in binary mode")
@click.option(
    "--include-excluded-removals",
    is_flag=True,
    help="Delete members of excluded files that no longer exist locally",
)
@click.pass_context
def sync(
    ctx: Any,
    hostname: Optional[str],
    username: Optional[str],
    password: str,
    local_root: Path,
    remote_root: str,
    exclude_path: tuple[str, ...],
    datasets_options: Optional[Path],
    index_file: Optional[Path],
    keep_index: bool,
    upload: bool,
    port: int,
    timeout: float,
    binary: bool,
    include_excluded_removals: bool,
) -> None:
    """Sync a local directory tree to partitioned data sets.

    Files new or modified since the last run are uploaded (with --upload)
    or reported, and members of deleted files are removed. Missing data
    sets are created on demand, using the allocation parameters listed
    for them in the --datasets-options file.

    Examples:
        # Show what changed since the last run
        zsync sync -s zos.example.com -p secret -l ./src -r USER.SRC

        # Upload, creating missing data sets with custom attributes
        zsync sync -s zos -p secret -l ./src -r USER.SRC -o -d datasets.txt

        # Leave the build directory out
        zsync sync -s zos -p secret -l ./src -r USER.SRC -o -e build/
    """
    out: OutputFormatter = ctx.obj["out"]

    pair = _build_pair(
        ctx,
        out,
        local_root,
        remote_root,
        exclude_path,
        include_excluded_removals,
        upload=upload,
        datasets_options=datasets_options,
    )

    index_manager = IndexManager(index_file or config.index_file)
    index = _load_index(index_manager, out, ctx)

    host = RemoteHost(
        hostname=hostname or config.hostname,
        username=username or config.username,
        password=password,
    )
    engine = SyncEngine(
        FTPTransport(port=port, timeout=timeout, binary=binary),
        host,
        out,
    )

    failure: Optional[Exception] = None
    stats: dict = {}
    try:
        stats = engine.sync_pair(pair, index)
    except (ZsyncError, ValueError) as e:
        failure = e

    # Entries of files processed before a failure are kept as well
    if index.dirty and not keep_index:
        logger.info(f"Saving index to '{index_manager.index_file}' file")
        try:
            index_manager.save(index)
        except ZsyncIndexError as e:
            out.error(str(e))
            ctx.exit(1)

    if failure is not None:
        out.error(str(failure))
        ctx.exit(1)

    if out.json_output:
        out.output_json(stats)


@main.command()
@click.option(
    "--local-root",
    "-l",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Local root directory",
)
@click.option("--remote-root", "-r", required=True, help="Remote root data set prefix")
@click.option(
    "--exclude-path",
    "-e",
    multiple=True,
    help="Exclude relative path prefix from the synchronization (repeatable)",
)
@click.option(
    "--index-file",
    "-x",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Index file (default: $ZSYNC_INDEX_FILE or zsync.json)",
)
@click.option(
    "--include-excluded-removals",
    is_flag=True,
    help="Report excluded files that no longer exist locally as removed",
)
@click.pass_context
def status(
    ctx: Any,
    local_root: Path,
    remote_root: str,
    exclude_path: tuple[str, ...],
    index_file: Optional[Path],
    include_excluded_removals: bool,
) -> None:
    """Show what the next sync would do, without connecting.

    Examples:
        zsync status -l ./src -r USER.SRC
    """
    out: OutputFormatter = ctx.obj["out"]

    pair = _build_pair(
        ctx, out, local_root, remote_root, exclude_path, include_excluded_removals
    )
    index = _load_index(IndexManager(index_file or config.index_file), out, ctx)

    calculator = ChangeSetCalculator(
        exclude_paths=pair.exclude,
        exclude_removals=pair.exclude_removals,
        local_root=pair.local,
    )
    change_set = calculator.compute(DirectoryScanner().scan_local(pair.local), index)

    changed = [
        {
            "path": f.relative_path,
            "size": f.size,
            "modified": format_timestamp(f.last_modified),
            "target": map_path(f.relative_path, pair.remote),
        }
        for f in change_set.changed
    ]
    removed = [
        {"path": path, "target": map_path(path, pair.remote)}
        for path in change_set.removed
    ]

    if out.json_output:
        out.output_json({"changed": changed, "removed": removed})
        return

    if change_set.is_empty:
        out.info("No files have been added, changed or removed")
        return

    rows = [
        ["changed", c["path"], format_size(c["size"]), c["modified"], c["target"]]
        for c in changed
    ]
    rows += [["removed", r["path"], "", "", r["target"]] for r in removed]
    out.output_table(["Status", "Path", "Size", "Modified", "Member"], rows)


@main.command(name="map")
@click.argument("paths", nargs=-1, required=True)
@click.option("--remote-root", "-r", required=True, help="Remote root data set prefix")
@click.pass_context
def map_command(ctx: Any, paths: tuple[str, ...], remote_root: str) -> None:
    """Print the member each relative PATH is synchronized to.

    Examples:
        zsync map -r USER.ROOT a/b/report.txt onlyfile.dat
    """
    out: OutputFormatter = ctx.obj["out"]
    root = normalize_remote_root(remote_root)
    if not root:
        out.error("Remote root must not be empty")
        ctx.exit(1)

    mapping = {}
    for path in paths:
        mapping[path] = map_path(path.replace("\\", "/"), root)

    if out.json_output:
        out.output_json(mapping)
        return

    for path, remote_name in mapping.items():
        click.echo(f"{path} -> {remote_name} (data set {container_of(remote_name)})")


if __name__ == "__main__":
    main()
