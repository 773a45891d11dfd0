"""Upward search for the nearest governing configuration file."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from loguru import logger

CONFIG_FILE_NAME = ".local_environment"

# Hard cutoff: depths 0..MAX_DEPTH are examined, nothing above.
MAX_DEPTH = 5


@dataclass(frozen=True)
class ConfigLocation:
    """Directory holding a configuration file and its distance from the start."""
    directory: Path
    depth: int
    file_name: str = CONFIG_FILE_NAME

    @property
    def config_path(self) -> Path:
        return self.directory / self.file_name


def locate(
    start: Union[str, os.PathLike],
    file_name: str = CONFIG_FILE_NAME,
    max_depth: int = MAX_DEPTH,
) -> Optional[ConfigLocation]:
    """Find the nearest directory at or above start that holds file_name.

    The walk is lexical (symlinks are not resolved) so the returned
    directory can be compared against the shell's $PWD.

    Args:
        start: Directory to start from (depth 0)
        file_name: Name of the configuration file
        max_depth: Number of parent hops allowed

    Returns:
        ConfigLocation for the nearest match, or None if the bound or the
        filesystem root is reached first
    """
    directory = Path(os.path.abspath(start))

    for depth in range(max_depth + 1):
        candidate = directory / file_name
        if candidate.is_file():
            logger.debug(f"Found {file_name} at depth {depth}: {directory}")
            return ConfigLocation(directory=directory, depth=depth, file_name=file_name)
        logger.debug(f"No {file_name} at depth {depth}: {directory}")

        parent = directory.parent
        if parent == directory:
            return None
        directory = parent

    return None
