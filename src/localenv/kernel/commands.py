"""Typed command model for .local_environment files.

The command set is closed: a file can only ever source something or
activate a Python virtual environment.
"""

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VENV_PATH = ".venv"


class SourceCommand(BaseModel):
    """Source a file, or an inline process substitution.

    When inline is True, target is an opaque `<(...)` expression that is
    forwarded verbatim and never interpreted.
    """
    kind: Literal["source"] = "source"
    target: str
    inline: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")

    def describe(self) -> str:
        return f"source {self.target}"


class PythonVenvCommand(BaseModel):
    """Activate a Python virtual environment rooted at path."""
    kind: Literal["python_venv"] = "python_venv"
    path: str = DEFAULT_VENV_PATH

    model_config = ConfigDict(frozen=True, extra="forbid")

    def describe(self) -> str:
        return f"python_venv {self.path}"


Command = Annotated[Union[SourceCommand, PythonVenvCommand], Field(discriminator="kind")]


class ParseWarning(BaseModel):
    """A configuration line that was dropped during parsing."""
    line_number: int  # 1-based
    line: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.reason}: {self.line}"


class ParsedConfig(BaseModel):
    """Commands in file order plus warnings for the lines that were dropped."""
    commands: List[Command] = Field(default_factory=list)
    warnings: List[ParseWarning] = Field(default_factory=list)
