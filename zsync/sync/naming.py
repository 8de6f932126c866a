"""Mapping of local relative paths to dataset names.

A local file ``a/b/report.txt`` synchronized under the remote root
``USER.ROOT`` is stored as member ``REPORT`` of the partitioned data set
``USER.ROOT.A.B``, i.e. ``USER.ROOT.A.B(REPORT)``.

Qualifiers and member names are limited to 8 characters, so mapping is
lossy: paths that only differ after the 8th character of a segment, or
only in letter case, end up in the same member.
"""

from typing import Optional

from ..utils import NAME_SEGMENT_LENGTH


def normalize_remote_root(remote_root: str) -> str:
    """Upper-case a remote root, dropping blanks, quotes and a trailing dot.

    Examples:
        >>> normalize_remote_root(" 'user.root.' ")
        'USER.ROOT'
    """
    return remote_root.strip().strip("'").rstrip(".").upper()


def _truncate(segment: str) -> str:
    return segment[:NAME_SEGMENT_LENGTH]


def member_name(file_name: str) -> str:
    """Derive a member name from a file name.

    The last extension is dropped and the rest truncated to 8 characters.
    A name made only of an extension, such as ``.profile``, therefore
    yields an empty member name.

    Examples:
        >>> member_name("report.txt")
        'report'
        >>> member_name("archive.tar.gz")
        'archive.'
        >>> member_name(".profile")
        ''
    """
    stem, dot, _ = file_name.rpartition(".")
    if not dot:
        stem = file_name
    return _truncate(stem)


def map_path(relative_path: str, remote_root: str) -> str:
    """Map a relative local path to a fully qualified member name.

    Args:
        relative_path: Path relative to the local root, ``/`` separated
        remote_root: Dataset name prefix all containers live under

    Returns:
        Upper-cased ``CONTAINER(MEMBER)`` name

    Examples:
        >>> map_path("a/b/report.txt", "user.root")
        'USER.ROOT.A.B(REPORT)'
        >>> map_path("onlyfile.dat", "USER.ROOT")
        'USER.ROOT(ONLYFILE)'
    """
    *directories, file_name = relative_path.split("/")

    container = remote_root
    if directories:
        qualifier = ".".join(_truncate(directory) for directory in directories)
        container = f"{remote_root}.{qualifier}"

    return f"{container}({member_name(file_name)})".upper()


def container_of(remote_name: str) -> str:
    """Strip the trailing ``(MEMBER)`` part of a remote name."""
    bracket = remote_name.rfind("(")
    if bracket == -1:
        return remote_name
    return remote_name[:bracket]


def relative_container(container: str, remote_root: str) -> Optional[str]:
    """Return the container name relative to the remote root.

    Returns None for the remote root container itself.

    Examples:
        >>> relative_container("USER.ROOT.A.B", "user.root")
        'A.B'
    """
    root = remote_root.upper()
    container = container.upper()
    if container == root or not container.startswith(root + "."):
        return None
    return container[len(root) + 1 :]
