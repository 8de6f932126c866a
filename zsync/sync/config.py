"""Allocation-parameter table loading.

The table lists, per container, the ``SITE`` parameters to send before
the container is created on demand. One entry per line::

    # container   parameters
    SRC           RECFM=FB LRECL=80 BLKSIZE=27920 PRIMARY=5 SECONDARY=5
    SRC.COPY      RECFM=FB LRECL=80 DIRECTORY=20

Container names are relative to the remote root and matched
case-insensitively.
"""

import logging
from pathlib import Path

from ..exceptions import ZsyncConfigError

logger = logging.getLogger(__name__)


def parse_allocation_parameters(text: str, source: str = "<string>") -> dict[str, str]:
    """Parse allocation parameters from text.

    Args:
        text: Table contents
        source: Name used in error messages

    Returns:
        Mapping from upper-cased relative container name to parameter string

    Raises:
        ZsyncConfigError: If a line has no separator between name and value
    """
    parameters: dict[str, str] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        parts = stripped.split(None, 1)
        if len(parts) != 2:
            raise ZsyncConfigError(
                f"{source}:{line_number}: expected '<data set> <parameters>', "
                f"got '{stripped}'"
            )
        name, value = parts
        parameters[name.upper()] = value.strip()
    return parameters


def load_allocation_parameters(path: Path) -> dict[str, str]:
    """Load the allocation-parameter table from a file.

    Raises:
        ZsyncConfigError: If the file cannot be read or is malformed
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ZsyncConfigError(f"Cannot read data sets options '{path}': {e}") from e

    parameters = parse_allocation_parameters(text, source=str(path))
    logger.debug(f"Loaded allocation parameters for {len(parameters)} data set(s)")
    return parameters
