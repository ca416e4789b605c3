"""Optional `.gitignore` handling for the directory scan, using pathspec."""

from __future__ import annotations

from pathlib import Path

import pathspec

from cachemanifest.errors import ScanError


def load_gitignore(directory: Path) -> pathspec.PathSpec | None:
    """
    Read `.gitignore` in the given directory and return a compiled `PathSpec`,
    or `None` if the file doesn't exist or has no patterns.
    """
    gitignore = directory / ".gitignore"
    if not gitignore.is_file():
        return None
    try:
        lines = gitignore.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise ScanError(f"Could not read {gitignore}: {e}") from e
    lines = [line for line in lines if line.strip() and not line.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines("gitignore", lines)


class GitignoreChain:
    """
    Caches `.gitignore` specs per directory under a scan root and answers
    whether a path is ignored by any of them. Each spec is matched against
    the path relative to the directory holding that `.gitignore`.
    """

    def __init__(self, root: Path) -> None:
        self._root: Path = root
        self._cache: dict[Path, pathspec.PathSpec | None] = {}

    def _get(self, directory: Path) -> pathspec.PathSpec | None:
        if directory not in self._cache:
            self._cache[directory] = load_gitignore(self._root / directory)
        return self._cache[directory]

    def is_ignored(self, rel_path: str, is_dir: bool = False) -> bool:
        """Check a `/`-separated path relative to the root."""
        parts = rel_path.split("/")
        # Check the root's .gitignore, then each ancestor directory's.
        for depth in range(len(parts)):
            spec = self._get(Path(*parts[:depth]))
            if spec is None:
                continue
            sub = "/".join(parts[depth:])
            if spec.match_file(sub + "/" if is_dir else sub):
                return True
        return False
