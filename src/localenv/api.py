"""Public API for localenv.

High-level workflow functions (check, allow, deny, status) that compose the
kernel pieces and return structured results. The CLI is a thin layer over
these; nothing here writes to stdout or stderr except through the logger.

Every call is stateless: trust is recomputed from the store and the
filesystem each time.
"""

import os
from pathlib import Path
from typing import Callable, Optional, Tuple, Union

from loguru import logger

from localenv._internal.settings import LocalEnvSettings, get_settings
from localenv.codes import Outcome
from localenv.contracts import AllowResult, CheckResult, DenyResult, StatusReport
from localenv.kernel.commands import ParsedConfig
from localenv.kernel.emitter import render
from localenv.kernel.hash_utils import hash_content
from localenv.kernel.locator import ConfigLocation, locate
from localenv.kernel.parser import parse_config
from localenv.kernel.trust_store import TrustStore

PathLike = Union[str, os.PathLike]

# confirm(location, text) -> True to approve
ConfirmCallback = Callable[[ConfigLocation, str], bool]


class ConfigReadError(OSError):
    """Raised when a located configuration file cannot be read."""
    pass


class ConfigNotFoundError(FileNotFoundError):
    """Raised by allow() when there is no configuration file to approve."""
    pass


def _working_dir(directory: Optional[PathLike]) -> Path:
    """Normalize directory input, defaulting to the process cwd."""
    if directory is None:
        return Path.cwd()
    return Path(os.path.abspath(directory))


def _location_fields(start: Path, location: Optional[ConfigLocation]) -> dict:
    fields = {"directory": str(start)}
    if location is not None:
        fields.update(
            owning_directory=str(location.directory),
            depth=location.depth,
            config_path=str(location.config_path),
        )
    return fields


def _read_config(location: ConfigLocation) -> bytes:
    try:
        return location.config_path.read_bytes()
    except OSError as e:
        raise ConfigReadError(f"Failed to read {location.config_path}: {e}") from e


def _parse(location: ConfigLocation, content: bytes) -> ParsedConfig:
    parsed = parse_config(content)
    for warning in parsed.warnings:
        logger.warning(f"{location.config_path}: ignoring {warning}")
    return parsed


def _locate_and_read(
    start: Path, settings: LocalEnvSettings
) -> Tuple[Optional[ConfigLocation], Optional[bytes]]:
    location = locate(start, file_name=settings.file_name)
    if location is None:
        logger.debug(f"No {settings.file_name} within reach of {start}")
        return None, None
    return location, _read_config(location)


def check(
    directory: Optional[PathLike] = None,
    settings: Optional[LocalEnvSettings] = None,
) -> CheckResult:
    """
    Decide whether the environment for a directory may be loaded.

    Args:
        directory: Directory to check (defaults to cwd)
        settings: Runtime settings (defaults to get_settings())

    Returns:
        CheckResult. Outcome NO_CONFIG and NOT_TRUSTED carry no script;
        TRUSTED carries the rendered script ending with the marker line.

    Raises:
        ConfigReadError: If the located file cannot be read
    """
    settings = settings or get_settings()
    start = _working_dir(directory)

    location, content = _locate_and_read(start, settings)
    if location is None:
        return CheckResult(outcome=Outcome.NO_CONFIG, **_location_fields(start, None))

    store = TrustStore.load(settings.store_path)
    if not store.is_trusted(location.directory, hash_content(content)):
        logger.debug(f"{location.config_path} is not trusted")
        return CheckResult(
            outcome=Outcome.NOT_TRUSTED,
            content=content.decode("utf-8", errors="replace"),
            **_location_fields(start, location),
        )

    parsed = _parse(location, content)
    return CheckResult(
        outcome=Outcome.TRUSTED,
        commands=parsed.commands,
        script=render(parsed.commands, location.directory),
        parse_warnings=parsed.warnings,
        **_location_fields(start, location),
    )


def allow(
    directory: Optional[PathLike] = None,
    confirm: Optional[ConfirmCallback] = None,
    emit: bool = False,
    settings: Optional[LocalEnvSettings] = None,
) -> AllowResult:
    """
    Approve the configuration file governing a directory.

    The hash recorded is the hash of exactly the bytes shown to confirm().

    Args:
        directory: Directory to approve for (defaults to cwd)
        confirm: Called with the location and file text; return True to
            approve. None approves without asking.
        emit: Also render the script for immediate evaluation
        settings: Runtime settings (defaults to get_settings())

    Returns:
        AllowResult; approved is False if confirm() refused, in which case
        the store is untouched

    Raises:
        ConfigNotFoundError: If no configuration file is within reach
        ConfigReadError: If the file cannot be read
        StoreWriteError: If the store cannot be saved
    """
    settings = settings or get_settings()
    start = _working_dir(directory)

    location, content = _locate_and_read(start, settings)
    if location is None:
        raise ConfigNotFoundError(f"No {settings.file_name} file found in {start}")

    fields = _location_fields(start, location)
    text = content.decode("utf-8", errors="replace")
    if confirm is not None and not confirm(location, text):
        logger.debug(f"Approval of {location.config_path} refused")
        return AllowResult(approved=False, **fields)

    parsed = _parse(location, content)
    store = TrustStore.load(settings.store_path)
    record = store.upsert(location.directory, hash_content(content))
    store.save()
    logger.debug(f"Approved {location.config_path} at {record.content_hash}")

    script = render(parsed.commands, location.directory) if emit else None
    return AllowResult(
        approved=True,
        record=record,
        commands=parsed.commands,
        script=script,
        parse_warnings=parsed.warnings,
        **fields,
    )


def deny(
    directory: Optional[PathLike] = None,
    settings: Optional[LocalEnvSettings] = None,
) -> DenyResult:
    """
    Revoke approval for a directory.

    Targets the directory owning the nearest configuration file, or the
    directory itself when none is found. Idempotent; the store is only
    rewritten when a record was actually removed.

    Raises:
        StoreWriteError: If the store cannot be saved
    """
    settings = settings or get_settings()
    start = _working_dir(directory)

    location = locate(start, file_name=settings.file_name)
    target = location.directory if location is not None else start

    store = TrustStore.load(settings.store_path)
    removed = store.remove(target)
    if removed is not None:
        store.save()
        logger.debug(f"Removed trust record for {removed.canonical_path}")

    return DenyResult(removed=removed is not None, **_location_fields(start, location))


def status(
    directory: Optional[PathLike] = None,
    settings: Optional[LocalEnvSettings] = None,
) -> StatusReport:
    """
    Report a directory's trust state without emitting anything evaluable.

    Raises:
        ConfigReadError: If the located file cannot be read
    """
    settings = settings or get_settings()
    start = _working_dir(directory)

    location, content = _locate_and_read(start, settings)
    if location is None:
        return StatusReport(outcome=Outcome.NO_CONFIG, **_location_fields(start, None))

    store = TrustStore.load(settings.store_path)
    record = store.get(location.directory)
    fields = _location_fields(start, location)
    if record is None or record.content_hash != hash_content(content):
        return StatusReport(outcome=Outcome.NOT_TRUSTED, record=record, **fields)

    parsed = _parse(location, content)
    return StatusReport(
        outcome=Outcome.TRUSTED,
        record=record,
        commands=parsed.commands,
        parse_warnings=parsed.warnings,
        **fields,
    )
