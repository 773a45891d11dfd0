"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed localenv package.
Every test gets its own trust store directory via LOCALENV_CONFIG_DIR so
nothing touches the real user configuration.
"""

from pathlib import Path

import pytest
from loguru import logger

from localenv._internal.settings import get_settings


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Point the trust store at a per-test directory."""
    path = tmp_path / "config"
    monkeypatch.setenv("LOCALENV_CONFIG_DIR", str(path))
    monkeypatch.delenv("LOCALENV_FILE_NAME", raising=False)
    monkeypatch.delenv("LOCALENV_STORE_NAME", raising=False)
    return path


@pytest.fixture
def settings(config_dir):
    return get_settings()


@pytest.fixture
def project(tmp_path):
    """An empty project directory, separate from the config directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def write_config():
    """Write a .local_environment file into a directory and return its path."""
    def _write(directory: Path, content, name: str = ".local_environment") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def make_venv():
    """Create a minimal virtualenv layout (only bin/activate) under a directory."""
    def _make(directory: Path, name: str = ".venv") -> Path:
        activate = directory / name / "bin" / "activate"
        activate.parent.mkdir(parents=True, exist_ok=True)
        activate.write_text("# activate\n", encoding="utf-8")
        return activate
    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks added by the CLI so they never outlive a captured stream."""
    yield
    logger.remove()
