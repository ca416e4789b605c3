"""
DirectoryScanner: recursive file discovery under a single root.

Walks the root, matches every regular file's root-relative path against the
configured include/exclude globs, and returns the matches as a sorted tuple of
`/`-separated relative paths.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable, Iterator
from pathlib import Path, PurePath

from cachemanifest.errors import ScanError
from cachemanifest.file_scanner.gitignore import GitignoreChain
from cachemanifest.file_scanner.patterns import GlobPattern, matches
from cachemanifest.file_scanner.types import ScanConfig

_logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    """`os.walk` error hook: abort the scan instead of skipping the directory."""
    raise ScanError(f"Error scanning {error.filename}: {error.strerror or error}") from error


class DirectoryScanner:
    """
    Finds the files under `config.root` selected by the configured patterns.

    Symlinks are followed. A symlink cycle is not detected here; it surfaces as
    a `ScanError` once the OS refuses to resolve the path.
    """

    def __init__(self, config: ScanConfig) -> None:
        self._config: ScanConfig = config

    @property
    def config(self) -> ScanConfig:
        return self._config

    def scan(self) -> tuple[str, ...]:
        """
        Return the selected relative paths, sorted by ordinal string comparison.

        Raises `ScanError` if the root is missing or not a directory, or if the
        walk hits an I/O error.
        """
        root = self._config.root
        if not root.exists():
            raise ScanError(f"Input directory not found: {root}")
        if not root.is_dir():
            raise ScanError(f"Input path is not a directory: {root}")

        selected = set(self._walk(root))
        result = tuple(sorted(selected))
        _logger.info("Scanned %s: %d file(s) selected", root, len(result))
        return result

    def _walk(self, root: Path) -> Iterator[str]:
        gitignore = GitignoreChain(root) if self._config.respect_gitignore else None

        for dirpath, dirnames, filenames in os.walk(
            root, onerror=_raise_walk_error, followlinks=True
        ):
            current = Path(dirpath)
            rel_dir = current.relative_to(root)

            if gitignore is not None:
                # Prune ignored directories in-place (prevents descent)
                dirnames[:] = [
                    d
                    for d in dirnames
                    if not gitignore.is_ignored(_relative(rel_dir, d), is_dir=True)
                ]

            for filename in filenames:
                rel_path = _relative(rel_dir, filename)
                if gitignore is not None and gitignore.is_ignored(rel_path):
                    _logger.debug("Ignored by .gitignore: %s", rel_path)
                    continue
                if not matches(rel_path, self._config.includes, self._config.excludes):
                    _logger.debug("Not selected: %s", rel_path)
                    continue
                if self._is_regular_file(current / filename):
                    yield _check_encodable(rel_path)

    @staticmethod
    def _is_regular_file(path: Path) -> bool:
        """Stat through symlinks; dangling or looping links are scan failures."""
        try:
            mode = os.stat(path).st_mode
        except OSError as e:
            raise ScanError(f"Error scanning {path}: {e.strerror or e}") from e
        return stat.S_ISREG(mode)


def _check_encodable(rel_path: str) -> str:
    """Manifests are UTF-8; names that aren't (surrogate-escaped bytes) can't be listed."""
    try:
        rel_path.encode("utf-8")
    except UnicodeEncodeError as e:
        shown = rel_path.encode("utf-8", "backslashreplace").decode("utf-8")
        raise ScanError(f"File name is not valid UTF-8: {shown}") from e
    return rel_path


def _relative(rel_dir: Path, name: str) -> str:
    """Join a walk-relative directory and a name with `/` separators."""
    return PurePath(rel_dir, name).as_posix() if rel_dir.parts else name


def scan(
    root: str | Path,
    includes: Iterable[str | GlobPattern] = (),
    excludes: Iterable[str | GlobPattern] = (),
) -> tuple[str, ...]:
    """Convenience wrapper: scan `root` with the given patterns."""
    return DirectoryScanner(ScanConfig.create(root, includes, excludes)).scan()
