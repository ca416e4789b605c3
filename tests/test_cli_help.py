"""Tests for CLI help text."""

from __future__ import annotations

import pytest

from cachemanifest.cli import main


def _render_help(capsys: pytest.CaptureFixture[str]) -> str:
    """Run `cachemanifest --help` via CLI entrypoint and return captured stdout."""
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    return capsys.readouterr().out


def test_help_includes_tagline(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "cachemanifest: Generate HTML5 application cache manifests from a directory tree" in out


def test_help_includes_common_usage(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "Common usage:" in out
    assert "cachemanifest -i webapp -o webapp/app.appcache" in out
    assert "cachemanifest -i webapp --list-files" in out


def test_help_lists_options(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    for flag in (
        "--output",
        "--input-directory",
        "--manifest-version",
        "--include",
        "--exclude",
        "--additional",
        "--network",
        "--fallback",
        "--respect-gitignore",
        "--omit-empty-network",
        "--config",
        "--list-files",
    ):
        assert flag in out


def test_help_mentions_config_files(capsys: pytest.CaptureFixture[str]) -> None:
    out = _render_help(capsys)
    assert "[tool.cachemanifest]" in out
