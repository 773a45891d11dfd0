"""localenv: approval-gated per-directory shell environments."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("localenv")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from localenv.api import check, allow, deny, status
from localenv.codes import ExitCode, Outcome
from localenv.contracts import AllowResult, CheckResult, DenyResult, StatusReport

__all__ = [
    "__version__",
    "check",
    "allow",
    "deny",
    "status",
    "Outcome",
    "ExitCode",
    "CheckResult",
    "AllowResult",
    "DenyResult",
    "StatusReport",
]
