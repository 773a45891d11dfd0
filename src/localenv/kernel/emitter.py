"""Render parsed commands into text for the calling shell to evaluate.

Output format: one shell line per command, in order, followed by a single
marker line `LOCALENV_DIR=<directory>` naming the directory that owns the
environment. Consumers strip the marker before evaluating the rest.
"""

import os
import shlex
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from loguru import logger

from .commands import Command, PythonVenvCommand, SourceCommand

MARKER_PREFIX = "LOCALENV_DIR"


def marker_line(owning_directory: Union[str, os.PathLike]) -> str:
    return f"{MARKER_PREFIX}={owning_directory}"


def resolve_path(path: str, owning_directory: Union[str, os.PathLike]) -> Path:
    """Resolve a configuration path the way a shell user expects.

    `~` and `~user` are expanded, absolute paths are kept, anything else is
    relative to the directory that owns the configuration file (not the
    current working directory).
    """
    expanded = Path(os.path.expanduser(path))
    if expanded.is_absolute():
        return expanded
    return Path(owning_directory) / expanded


def command_to_shell(command: Command, owning_directory: Union[str, os.PathLike]) -> Optional[str]:
    """Convert one command to a shell line, or None if it must be skipped."""
    if isinstance(command, SourceCommand):
        if command.inline:
            return f"source {command.target}"
        resolved = resolve_path(command.target, owning_directory)
        return f"source {shlex.quote(str(resolved))}"

    if isinstance(command, PythonVenvCommand):
        activate = resolve_path(command.path, owning_directory) / "bin" / "activate"
        if not activate.is_file():
            logger.warning(f"Python venv activate script not found: {activate}")
            return None
        return f"source {shlex.quote(str(activate))}"

    raise TypeError(f"Unsupported command: {type(command).__name__}")


def render(commands: Sequence[Command], owning_directory: Union[str, os.PathLike]) -> str:
    """Render commands followed by the directory marker line.

    Args:
        commands: Parsed commands, in execution order
        owning_directory: Directory where the configuration file was found

    Returns:
        Newline-terminated shell text ending with the marker line
    """
    lines: List[str] = []
    for command in commands:
        line = command_to_shell(command, owning_directory)
        if line is not None:
            lines.append(line)
    lines.append(marker_line(owning_directory))
    return "\n".join(lines) + "\n"


def split_marker(output: str) -> Tuple[str, Optional[str]]:
    """Separate emitted text into (script, marker directory or None).

    Mirrors what the shell hook does with `check` output.
    """
    prefix = f"{MARKER_PREFIX}="
    directory = None
    script_lines = []
    for line in output.splitlines():
        if line.startswith(prefix):
            directory = line[len(prefix):]
        else:
            script_lines.append(line)
    script = "\n".join(script_lines)
    return (script + "\n" if script_lines else ""), directory
