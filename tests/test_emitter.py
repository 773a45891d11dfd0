"""Tests for rendering commands into shell text."""

import shlex
from pathlib import Path

import pytest

from localenv.kernel.commands import PythonVenvCommand, SourceCommand
from localenv.kernel.emitter import (
    MARKER_PREFIX,
    marker_line,
    render,
    resolve_path,
    split_marker,
)


def _source_line(path: Path) -> str:
    return f"source {shlex.quote(str(path))}"


def test_marker_prefix():
    assert MARKER_PREFIX == "LOCALENV_DIR"
    assert marker_line("/work/project") == "LOCALENV_DIR=/work/project"


def test_empty_commands_emit_only_marker(project):
    assert render([], project) == f"LOCALENV_DIR={project}\n"


def test_marker_is_last_line(project):
    output = render([SourceCommand(target="/etc/profile")], project)
    lines = output.splitlines()
    assert lines[-1] == f"LOCALENV_DIR={project}"
    assert sum(1 for line in lines if line.startswith("LOCALENV_DIR=")) == 1
    assert output.endswith("\n")


class TestSource:

    def test_relative_path_resolved_against_owning_directory(self, project, monkeypatch, tmp_path):
        """Relative paths belong to the config's directory, not the cwd."""
        monkeypatch.chdir(tmp_path)
        output = render([SourceCommand(target="./setup.sh")], project)
        assert output.splitlines()[0] == _source_line(project / "setup.sh")

    def test_absolute_path_kept(self, project):
        output = render([SourceCommand(target="/opt/tools/env.sh")], project)
        assert output.splitlines()[0] == "source /opt/tools/env.sh"

    def test_home_expanded(self, project, tmp_path, monkeypatch):
        home = tmp_path / "home"
        monkeypatch.setenv("HOME", str(home))
        output = render([SourceCommand(target="~/.bashrc")], project)
        assert output.splitlines()[0] == _source_line(home / ".bashrc")

    def test_path_with_spaces_is_quoted(self, project):
        output = render([SourceCommand(target="my scripts/env.sh")], project)
        line = output.splitlines()[0]
        assert line == f"source {shlex.quote(str(project / 'my scripts' / 'env.sh'))}"
        assert shlex.split(line) == ["source", str(project / "my scripts" / "env.sh")]

    def test_process_substitution_verbatim(self, project):
        output = render([SourceCommand(target="<(toolx completion)", inline=True)], project)
        assert output.splitlines()[0] == "source <(toolx completion)"


class TestPythonVenv:

    def test_activate_script(self, project, make_venv):
        activate = make_venv(project)
        output = render([PythonVenvCommand()], project)
        assert output.splitlines()[0] == _source_line(activate)

    def test_custom_path(self, project, make_venv):
        activate = make_venv(project, name="env")
        output = render([PythonVenvCommand(path="env")], project)
        assert output.splitlines()[0] == _source_line(activate)

    def test_missing_activate_is_skipped(self, project):
        output = render([PythonVenvCommand(), SourceCommand(target="/etc/profile")], project)
        assert output.splitlines() == ["source /etc/profile", f"LOCALENV_DIR={project}"]


def test_order_matches_command_order(project, make_venv):
    activate = make_venv(project)
    commands = [
        SourceCommand(target="./first.sh"),
        PythonVenvCommand(),
        SourceCommand(target="<(toolx completion)", inline=True),
    ]
    assert render(commands, project).splitlines() == [
        _source_line(project / "first.sh"),
        _source_line(activate),
        "source <(toolx completion)",
        f"LOCALENV_DIR={project}",
    ]


def test_unknown_command_type_rejected(project):
    with pytest.raises(TypeError):
        render([object()], project)


class TestResolvePath:

    def test_relative(self, project):
        assert resolve_path("a/b.sh", project) == project / "a" / "b.sh"

    def test_absolute(self, project):
        assert resolve_path("/x/y.sh", project) == Path("/x/y.sh")


class TestSplitMarker:

    def test_separates_script_and_marker(self):
        script, directory = split_marker("source /a.sh\nLOCALENV_DIR=/work\n")
        assert script == "source /a.sh\n"
        assert directory == "/work"

    def test_missing_marker(self):
        script, directory = split_marker("source /a.sh\n")
        assert script == "source /a.sh\n"
        assert directory is None

    def test_marker_only(self):
        assert split_marker("LOCALENV_DIR=/work\n") == ("", "/work")

    def test_round_trip_with_render(self, project):
        output = render([SourceCommand(target="/etc/profile")], project)
        assert split_marker(output) == ("source /etc/profile\n", str(project))
