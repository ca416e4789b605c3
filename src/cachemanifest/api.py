"""
Programmatic entry point: scan a directory and write its cache manifest.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from cachemanifest.file_scanner import DirectoryScanner, ScanConfig
from cachemanifest.manifest import ManifestConfig, write_manifest

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a successful run."""

    output: Path
    files: tuple[str, ...]


def generate_manifest(scan_config: ScanConfig, manifest_config: ManifestConfig) -> GenerationResult:
    """
    Scan `scan_config.root` and write the manifest to `manifest_config.output`.

    Nothing is written if the scan fails. Raises `ScanError` or `WriteError`.
    """
    _logger.debug(
        "Scanning %s (includes=%s, excludes=%s)",
        scan_config.root,
        [p.pattern for p in scan_config.includes],
        [p.pattern for p in scan_config.excludes],
    )
    files = DirectoryScanner(scan_config).scan()
    output = write_manifest(manifest_config.output, files, manifest_config)
    return GenerationResult(output=output, files=files)
