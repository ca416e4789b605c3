"""Console script registration for the installed distribution."""

from __future__ import annotations

from importlib.metadata import EntryPoint, entry_points

import pytest

from cachemanifest import cli


def _console_script(name: str) -> EntryPoint:
    matches = [ep for ep in entry_points(group="console_scripts") if ep.name == name]
    assert len(matches) == 1, f"expected one console script named {name!r}"
    return matches[0]


def test_console_scripts_resolve_to_cli_main() -> None:
    primary = _console_script("cachemanifest")
    alias = _console_script("cachemanifest-py")
    assert primary.value == alias.value == "cachemanifest.cli:main"
    assert primary.load() is cli.main
    assert alias.load() is cli.main


def test_console_script_runs_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert _console_script("cachemanifest").load()(["--version"]) == 0
    assert capsys.readouterr().out.startswith("v")
