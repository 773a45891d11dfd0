"""Public result models for localenv workflows."""

from typing import List, Optional

from pydantic import BaseModel, Field

from localenv.codes import Outcome
from localenv.kernel.commands import Command, ParseWarning
from localenv.kernel.trust_store import TrustRecord


class LocatedResult(BaseModel):
    """Fields shared by every workflow result."""
    directory: str  # Directory the operation was invoked for
    owning_directory: Optional[str] = None  # Where the configuration file was found
    depth: Optional[int] = None  # Parent hops from directory to owning_directory
    config_path: Optional[str] = None


class CheckResult(LocatedResult):
    """Result of `check`: whether to emit, and what."""
    outcome: Outcome
    content: Optional[str] = None  # Decoded file text, for NOT_TRUSTED diagnostics
    commands: List[Command] = Field(default_factory=list)
    script: Optional[str] = None  # Only set when outcome is TRUSTED
    parse_warnings: List[ParseWarning] = Field(default_factory=list)


class AllowResult(LocatedResult):
    """Result of `allow`."""
    approved: bool
    record: Optional[TrustRecord] = None
    commands: List[Command] = Field(default_factory=list)
    script: Optional[str] = None  # Only set when approved and emit was requested
    parse_warnings: List[ParseWarning] = Field(default_factory=list)


class DenyResult(LocatedResult):
    """Result of `deny`."""
    removed: bool  # False when there was nothing to remove


class StatusReport(LocatedResult):
    """Read-only view of a directory's trust state."""
    outcome: Outcome
    record: Optional[TrustRecord] = None  # Present when a record exists, even if stale
    commands: List[Command] = Field(default_factory=list)  # Only when TRUSTED
    parse_warnings: List[ParseWarning] = Field(default_factory=list)
