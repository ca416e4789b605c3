"""
Ant-style glob patterns over `/`-separated relative paths.

Supported wildcards:

- `*` matches any run of characters within one path segment
- `?` matches exactly one character within a path segment
- `**` matches any run of characters including `/`; as a whole segment it
  matches zero or more directories, so `**/*.png` matches both `a.png` and
  `img/a.png`

Everything else is literal. Backslashes are read as `/`, a leading `/` is
ignored, and a trailing `/` matches everything below that directory
(`assets/` is the same as `assets/**`).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from cachemanifest.errors import ConfigError


def _translate_segment(segment: str) -> str:
    out: list[str] = []
    i = 0
    n = len(segment)
    while i < n:
        c = segment[i]
        if c == "*":
            if i + 1 < n and segment[i + 1] == "*":
                out.append(".*")
                i += 2
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


def normalize_pattern(pattern: str) -> str:
    """Apply the separator and trailing-slash rules. Raises `ConfigError` on blank input."""
    if not pattern or not pattern.strip():
        raise ConfigError(f"Invalid glob pattern: {pattern!r} (pattern is empty)")
    normalized = pattern.replace("\\", "/")
    if normalized.endswith("/"):
        normalized += "**"
    return normalized.lstrip("/")


def translate(pattern: str) -> str:
    """Translate a glob pattern into an (unanchored) regular expression string."""
    segments = normalize_pattern(pattern).split("/")
    parts: list[str] = []
    for i, segment in enumerate(segments):
        is_last = i == len(segments) - 1
        if segment == "**":
            parts.append(".*" if is_last else "(?:.*/)?")
        else:
            parts.append(_translate_segment(segment) + ("" if is_last else "/"))
    return "".join(parts)


class GlobPattern:
    """A compiled glob pattern. Compilation fails fast with `ConfigError`."""

    __slots__ = ("pattern", "_regex")

    def __init__(self, pattern: str) -> None:
        self.pattern: str = pattern
        self._regex: re.Pattern[str] = re.compile(translate(pattern), re.DOTALL)

    def matches(self, relative_path: str) -> bool:
        return self._regex.fullmatch(relative_path) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GlobPattern):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __repr__(self) -> str:
        return f"GlobPattern({self.pattern!r})"


# Used whenever the include set is empty.
MATCH_ALL = GlobPattern("**")


def compile_patterns(patterns: Iterable[str | GlobPattern]) -> tuple[GlobPattern, ...]:
    """Compile patterns, dropping duplicates but keeping first-seen order."""
    compiled: dict[GlobPattern, None] = {}
    for p in patterns:
        compiled[p if isinstance(p, GlobPattern) else GlobPattern(p)] = None
    return tuple(compiled)


def matches(
    relative_path: str,
    includes: Iterable[GlobPattern],
    excludes: Iterable[GlobPattern],
) -> bool:
    """
    True iff `relative_path` matches at least one include and no exclude.
    An empty include set counts as match-all.
    """
    include_list = list(includes) or [MATCH_ALL]
    if not any(p.matches(relative_path) for p in include_list):
        return False
    return not any(p.matches(relative_path) for p in excludes)
