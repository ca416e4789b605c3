"""
Default include and exclude patterns for the directory scan.

Patterns are Ant-style globs matched against `/`-separated paths relative to
the scan root (see `cachemanifest.file_scanner.patterns`).
"""

from __future__ import annotations

# Every file at any depth.
DEFAULT_INCLUDES: tuple[str, ...] = ("**",)

DEFAULT_EXCLUDES: tuple[str, ...] = ()
