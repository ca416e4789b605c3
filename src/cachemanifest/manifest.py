"""
Rendering and writing of HTML5 application cache manifests.

Output layout, in order: header (with optional version line), the file
listing, optional additional entries, the `NETWORK:` section, and the optional
`FALLBACK:` section. Always UTF-8 with `\\n` line endings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from strif import atomic_output_file

from cachemanifest.errors import WriteError

_logger = logging.getLogger(__name__)

GENERATOR = "cachemanifest"

NO_FILES_WARNING = "No files matched provided include/exclude patterns"


def _unique(items: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


@dataclass(frozen=True)
class ManifestConfig:
    """
    Immutable settings for rendering one manifest.

    `network_resources=None` omits the `NETWORK:` section entirely; an empty
    tuple still renders the `NETWORK:` header. Empty `version` or `fallback`
    omits that line or section.
    """

    output: Path
    version: str = ""
    additionals: tuple[str, ...] = ()
    network_resources: tuple[str, ...] | None = ()
    fallback: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "output", Path(self.output))
        object.__setattr__(self, "version", self.version or "")
        object.__setattr__(self, "fallback", self.fallback or "")
        object.__setattr__(self, "additionals", _unique(self.additionals))
        if self.network_resources is not None:
            object.__setattr__(self, "network_resources", tuple(self.network_resources))


def render_manifest(files: Sequence[str], config: ManifestConfig) -> str:
    """Render manifest text. `files` are written in the order given."""
    lines: list[str] = ["CACHE MANIFEST", "", "#", f"# Generated by {GENERATOR}"]
    if config.version:
        lines.append(f"# version: {config.version}")
    lines.append("#")

    # No CACHE: header here. It is only needed after another section, and in
    # first position it breaks caching in some browsers.
    if files:
        lines.extend(files)
    else:
        lines.append(f"# WARNING: {NO_FILES_WARNING}")

    if config.additionals:
        lines.append("# Additional Entries")
        lines.extend(config.additionals)

    if config.network_resources is not None:
        lines.extend(["", "NETWORK:"])
        lines.extend(config.network_resources)

    if config.fallback:
        lines.extend(["", "FALLBACK:", config.fallback])

    return "\n".join(lines) + "\n"


def write_manifest(destination: str | Path, files: Sequence[str], config: ManifestConfig) -> Path:
    """
    Render the manifest and write it to `destination`, creating parent
    directories as needed and replacing any existing file.

    The content goes to a temporary file that is renamed into place, so a
    failed write leaves any previous manifest untouched. I/O failures raise
    `WriteError`.
    """
    dest = Path(destination)
    if not files:
        _logger.warning(NO_FILES_WARNING)
    try:
        # Encode before touching the filesystem so bad input leaves no temp file.
        data = render_manifest(files, config).encode("utf-8")
        with atomic_output_file(dest, make_parents=True) as tmp_path:
            Path(tmp_path).write_bytes(data)
    except (OSError, UnicodeError) as e:
        raise WriteError(f"Could not write manifest {dest}: {e}") from e
    _logger.info("Wrote %s (%d file(s))", dest, len(files))
    return dest
