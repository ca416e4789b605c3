"""Configuration types for the directory scan."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from cachemanifest.file_scanner.defaults import DEFAULT_EXCLUDES, DEFAULT_INCLUDES
from cachemanifest.file_scanner.patterns import GlobPattern, compile_patterns


@dataclass(frozen=True)
class ScanConfig:
    """
    Immutable configuration for one scan.

    Patterns are compiled on construction, so a malformed pattern raises
    `ConfigError` here rather than partway through a walk. An empty `includes`
    falls back to `DEFAULT_INCLUDES` (match everything).
    """

    root: Path
    includes: tuple[GlobPattern, ...] = field(
        default_factory=lambda: compile_patterns(DEFAULT_INCLUDES)
    )
    excludes: tuple[GlobPattern, ...] = field(
        default_factory=lambda: compile_patterns(DEFAULT_EXCLUDES)
    )
    respect_gitignore: bool = False

    def __post_init__(self) -> None:
        # Accept plain strings and any iterable; store compiled tuples.
        object.__setattr__(self, "root", Path(self.root))
        includes = compile_patterns(self.includes)
        object.__setattr__(self, "includes", includes or compile_patterns(DEFAULT_INCLUDES))
        object.__setattr__(self, "excludes", compile_patterns(self.excludes))

    @classmethod
    def create(
        cls,
        root: str | Path,
        includes: Iterable[str | GlobPattern] = (),
        excludes: Iterable[str | GlobPattern] = (),
        respect_gitignore: bool = False,
    ) -> ScanConfig:
        """Build a config from plain pattern strings."""
        return cls(
            root=Path(root),
            includes=compile_patterns(includes),
            excludes=compile_patterns(excludes),
            respect_gitignore=respect_gitignore,
        )
