"""Outcome and exit code constants for localenv.

These constants prevent stringly-typed outcomes and give the shell hook
a stable exit code contract.
"""

from enum import Enum, IntEnum


class Outcome(str, Enum):
    """Result of evaluating a directory against the trust store."""

    # Normal, silent: no configuration file within the search bound
    NO_CONFIG = "NO_CONFIG"
    # File exists but is unapproved or changed since approval
    NOT_TRUSTED = "NOT_TRUSTED"
    # File exists and its hash matches the stored approval
    TRUSTED = "TRUSTED"


class ExitCode(IntEnum):
    """Process exit codes for the localenv CLI."""

    OK = 0
    # Operation failed (unreadable file, unwritable store, unexpected error)
    FAILURE = 1
    # argparse usage errors
    USAGE = 2
    # Approval required; expected and recoverable, not a crash
    ATTENTION = 3
