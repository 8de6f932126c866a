"""Explicit configuration of one sync run."""

from dataclasses import dataclass, field
from pathlib import Path

from .modes import SyncMode
from .naming import normalize_remote_root


@dataclass
class SyncPair:
    """A local directory and the remote dataset prefix it is mirrored to.

    Examples:
        >>> pair = SyncPair(local=Path("src"), remote="user.src")
        >>> pair.remote
        'USER.SRC'
    """

    local: Path
    """Local root directory"""

    remote: str
    """Remote root data set name prefix (e.g. ``USER.ROOT``)"""

    sync_mode: SyncMode = SyncMode.REPORT
    """Whether changed files are uploaded or only reported"""

    exclude: list[str] = field(default_factory=list)
    """Relative path prefixes excluded from the sync"""

    exclude_removals: bool = True
    """Whether exclusions also hide removed files"""

    allocation_parameters: dict[str, str] = field(default_factory=dict)
    """SITE parameters per container, keyed by name relative to the remote root"""

    def __post_init__(self) -> None:
        # Accept plain strings for convenience
        self.local = Path(self.local)
        self.remote = normalize_remote_root(self.remote)
        if not self.remote:
            raise ValueError("Remote root must not be empty")
        if not isinstance(self.sync_mode, SyncMode):
            self.sync_mode = SyncMode.from_string(self.sync_mode)
        self.exclude = [prefix.replace("\\", "/") for prefix in self.exclude]
        self.allocation_parameters = {
            name.upper(): value for name, value in self.allocation_parameters.items()
        }

    def allocation_parameters_for(self, relative_container: str) -> str:
        """Return the SITE parameters configured for a relative container name.

        Returns an empty string when none are configured.
        """
        return self.allocation_parameters.get(relative_container.upper(), "")


@dataclass
class RemoteHost:
    """Where and as whom to open the remote session."""

    hostname: str
    username: str
    password: str = field(repr=False, default="")
