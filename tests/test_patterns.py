"""Tests for glob pattern compilation and matching."""

from __future__ import annotations

import pytest

from cachemanifest.errors import ConfigError
from cachemanifest.file_scanner.patterns import (
    MATCH_ALL,
    GlobPattern,
    compile_patterns,
    matches,
    normalize_pattern,
)


def test_single_star_stays_in_segment():
    p = GlobPattern("*.html")
    assert p.matches("index.html")
    assert not p.matches("pages/index.html")


def test_question_mark_matches_one_char():
    p = GlobPattern("img/?.png")
    assert p.matches("img/c.png")
    assert not p.matches("img/cc.png")
    assert not p.matches("img/.png")


def test_double_star_segment_matches_zero_or_more_dirs():
    p = GlobPattern("**/*.png")
    assert p.matches("c.png")
    assert p.matches("img/c.png")
    assert p.matches("img/icons/c.png")
    assert not p.matches("c.pngx")


def test_double_star_in_middle():
    p = GlobPattern("a/**/b.txt")
    assert p.matches("a/b.txt")
    assert p.matches("a/x/y/b.txt")
    assert not p.matches("ab.txt")
    assert not p.matches("c/a/b.txt")


def test_double_star_inside_segment_crosses_separators():
    p = GlobPattern("foo**")
    assert p.matches("foo")
    assert p.matches("foobar/baz.js")


def test_star_dot_star_requires_a_dot():
    p = GlobPattern("**/*.*")
    assert p.matches("a.html")
    assert p.matches("img/c.png")
    assert not p.matches("Makefile")


def test_trailing_slash_matches_everything_below():
    p = GlobPattern("assets/")
    assert p.matches("assets/app.js")
    assert p.matches("assets/img/logo.png")
    assert not p.matches("assetsx/app.js")


def test_leading_slash_and_backslashes_are_normalized():
    assert GlobPattern("/index.html").matches("index.html")
    assert GlobPattern("css\\*.css").matches("css/site.css")
    assert normalize_pattern("\\css\\") == "css/**"


def test_other_characters_are_literal():
    p = GlobPattern("file[1]+(x).txt")
    assert p.matches("file[1]+(x).txt")
    assert not p.matches("file1+x.txt")


def test_matching_is_case_sensitive():
    assert not GlobPattern("*.HTML").matches("index.html")


@pytest.mark.parametrize("bad", ["", "   "])
def test_blank_pattern_fails_at_compile_time(bad: str):
    with pytest.raises(ConfigError, match="empty"):
        GlobPattern(bad)


def test_compile_patterns_dedupes_in_order():
    compiled = compile_patterns(["b/*", "a/*", "b/*", GlobPattern("a/*")])
    assert [p.pattern for p in compiled] == ["b/*", "a/*"]


def test_glob_pattern_equality_and_repr():
    assert GlobPattern("*.js") == GlobPattern("*.js")
    assert len({GlobPattern("*.js"), GlobPattern("*.js")}) == 1
    assert repr(GlobPattern("*.js")) == "GlobPattern('*.js')"


def test_matches_include_and_exclude():
    includes = compile_patterns(["**/*.*"])
    excludes = compile_patterns(["**/*.png"])
    assert matches("a.html", includes, excludes)
    assert not matches("img/c.png", includes, excludes)
    assert not matches("README", includes, excludes)


def test_matches_empty_includes_is_match_all():
    assert matches("anything/at/all", (), ())
    assert matches("Makefile", [], [])
    assert not matches("x.tmp", [], compile_patterns(["*.tmp"]))


def test_match_all_pattern():
    assert MATCH_ALL.matches("a")
    assert MATCH_ALL.matches("a/b/c.d")
