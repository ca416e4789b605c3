"""
cachemanifest: generate HTML5 application cache manifests from a directory tree.

Usage::

    from cachemanifest import ManifestConfig, ScanConfig, generate_manifest

    result = generate_manifest(
        ScanConfig.create("webapp", includes=["**/*.*"], excludes=["**/*.map"]),
        ManifestConfig(output="webapp/app.appcache", version="3"),
    )
"""

from cachemanifest.api import GenerationResult, generate_manifest
from cachemanifest.errors import CacheManifestError, ConfigError, ScanError, WriteError
from cachemanifest.file_scanner import (
    DirectoryScanner,
    GlobPattern,
    ScanConfig,
    matches,
    scan,
)
from cachemanifest.manifest import ManifestConfig, render_manifest, write_manifest

__all__ = [
    "CacheManifestError",
    "ConfigError",
    "DirectoryScanner",
    "GenerationResult",
    "GlobPattern",
    "ManifestConfig",
    "ScanConfig",
    "ScanError",
    "WriteError",
    "generate_manifest",
    "matches",
    "render_manifest",
    "scan",
    "write_manifest",
]
