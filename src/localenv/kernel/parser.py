"""Parser for .local_environment files.

Line-oriented and tolerant: a line that cannot be understood is dropped
and reported as a warning, and parsing carries on with the next line.
Parsing never raises.
"""

import shlex
from typing import List, Optional, Tuple, Union

from .commands import (
    DEFAULT_VENV_PATH,
    Command,
    ParsedConfig,
    ParseWarning,
    PythonVenvCommand,
    SourceCommand,
)

SOURCE_KEYWORD = "source"
PYTHON_VENV_KEYWORD = "python_venv"
PROCESS_SUBSTITUTION_OPEN = "<("


def _decode(content: Union[str, bytes]) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def _strip_comment(rest: str) -> str:
    """Cut a trailing `# ...` comment that starts a word outside quotes.

    A `#` inside a word (`./env#1.sh`) or inside quotes is kept.
    """
    quote = None
    escaped = False
    for i, char in enumerate(rest):
        if escaped:
            escaped = False
        elif char == "\\" and quote != "'":
            escaped = True
        elif quote is not None:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == "#" and (i == 0 or rest[i - 1].isspace()):
            return rest[:i].rstrip()
    return rest


def _split_args(rest: str) -> Optional[List[str]]:
    """Split arguments with POSIX shell quoting; None on unbalanced quotes."""
    try:
        return shlex.split(rest)
    except ValueError:
        return None


def _parse_source(rest: str) -> Tuple[Optional[Command], Optional[str]]:
    if rest.startswith(PROCESS_SUBSTITUTION_OPEN):
        # Opaque: only the outer shape is checked, the body is never parsed
        if rest.endswith(")") and rest[len(PROCESS_SUBSTITUTION_OPEN):-1].strip():
            return SourceCommand(target=rest, inline=True), None
        return None, "malformed process substitution"

    args = _split_args(rest)
    if args is None:
        return None, "unbalanced quotes"
    if len(args) != 1:
        return None, "source expects exactly one path"
    return SourceCommand(target=args[0]), None


def _parse_python_venv(rest: str) -> Tuple[Optional[Command], Optional[str]]:
    args = _split_args(rest)
    if args is None:
        return None, "unbalanced quotes"
    if len(args) > 1:
        return None, "python_venv expects zero or one path"
    path = args[0] if args else DEFAULT_VENV_PATH
    return PythonVenvCommand(path=path), None


def parse_line(line: str) -> Tuple[Optional[Command], Optional[str]]:
    """Parse a single non-blank, non-comment line.

    Returns:
        (command, None) on success, (None, reason) when the line is dropped
    """
    parts = line.split(None, 1)
    keyword = parts[0]
    rest = _strip_comment(parts[1].strip()) if len(parts) > 1 else ""

    if keyword == SOURCE_KEYWORD:
        return _parse_source(rest)
    if keyword == PYTHON_VENV_KEYWORD:
        return _parse_python_venv(rest)
    return None, "unknown command"


def parse_config(content: Union[str, bytes]) -> ParsedConfig:
    """Parse configuration text into commands, in file order.

    Args:
        content: Raw file bytes (decoded as UTF-8) or text

    Returns:
        ParsedConfig with the recognized commands and one warning per
        dropped line
    """
    commands: List[Command] = []
    warnings: List[ParseWarning] = []

    for line_number, raw_line in enumerate(_decode(content).splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        command, reason = parse_line(line)
        if command is None:
            warnings.append(ParseWarning(line_number=line_number, line=line, reason=reason))
            continue
        commands.append(command)

    return ParsedConfig(commands=commands, warnings=warnings)


def parse(content: Union[str, bytes]) -> List[Command]:
    """Parse configuration text and return only the commands."""
    return parse_config(content).commands
