"""Packaging regression tests.

Tests that verify the package structure and the data files it ships.
"""

from importlib.resources import files
from pathlib import Path


def test_source_layout():
    """Test that the src layout holds localenv and its subpackages."""
    here = Path(__file__).resolve().parent
    src_localenv = here.parent / "src" / "localenv"

    assert src_localenv.exists(), "localenv package should exist in src/"
    assert (src_localenv / "kernel").exists(), "localenv.kernel should exist"
    assert (src_localenv / "_internal").exists(), "localenv._internal should exist"
    assert (src_localenv / "hook.zsh").exists(), "hook.zsh should ship with the package"


def test_import_boundary():
    import localenv
    import localenv.kernel.parser  # noqa: F401

    # Check version: in dev mode it's "dev", in installed mode it's "1.0.0"
    assert localenv.__version__ in ("1.0.0", "dev")


def test_hook_is_package_data():
    hook = files("localenv").joinpath("hook.zsh").read_text(encoding="utf-8")
    assert "LOCALENV_DIR=" in hook
    assert "localenv check --dir" in hook


def test_hook_honours_custom_file_name():
    """The hook's fast path looks for the same file name as `localenv check`."""
    hook = files("localenv").joinpath("hook.zsh").read_text(encoding="utf-8")
    assert '${LOCALENV_FILE_NAME:-.local_environment}' in hook
    assert '-f "$check_dir/$config_name"' in hook
    assert '-f "$check_dir/.local_environment"' not in hook
