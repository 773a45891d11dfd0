"""Runtime configuration for localenv.

Values come from the environment (prefix LOCALENV_), falling back to the
XDG base directory convention for the trust store location.
"""

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from localenv.kernel.locator import CONFIG_FILE_NAME

APP_NAME = "localenv"
STORE_FILE_NAME = "allowed.json"


def default_config_dir() -> Path:
    """$XDG_CONFIG_HOME/localenv, or ~/.config/localenv."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / APP_NAME


class LocalEnvSettings(BaseSettings):
    """
    Settings for a single localenv invocation.

    Environment variables:
        LOCALENV_CONFIG_DIR: directory holding the trust store
        LOCALENV_FILE_NAME: configuration file name to look for
        LOCALENV_STORE_NAME: trust store file name
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCALENV_",
        extra="ignore",
    )

    config_dir: Path = Field(
        default_factory=default_config_dir,
        description="Directory holding the trust store"
    )

    file_name: str = Field(
        default=CONFIG_FILE_NAME,
        description="Name of the per-directory configuration file"
    )

    store_name: str = Field(
        default=STORE_FILE_NAME,
        description="File name of the trust store inside config_dir"
    )

    @field_validator("file_name", "store_name")
    @classmethod
    def validate_plain_name(cls, v: str) -> str:
        """File names must not contain path separators."""
        if not v or "/" in v or v in (".", ".."):
            raise ValueError(f"'{v}' must be a plain file name")
        return v

    @property
    def store_path(self) -> Path:
        return Path(self.config_dir).expanduser() / self.store_name


def get_settings() -> LocalEnvSettings:
    """Build settings from the current environment.

    Not cached: every call re-reads the environment.
    """
    return LocalEnvSettings()
