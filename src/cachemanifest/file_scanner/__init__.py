"""
Directory scanning with Ant-style include/exclude glob patterns.

No imports from `cachemanifest` outside this package except `cachemanifest.errors`.

Usage::

    from cachemanifest.file_scanner import DirectoryScanner, ScanConfig

    config = ScanConfig.create("webapp", includes=["**/*.*"], excludes=["**/*.map"])
    files = DirectoryScanner(config).scan()
"""

from cachemanifest.file_scanner.defaults import DEFAULT_EXCLUDES, DEFAULT_INCLUDES
from cachemanifest.file_scanner.patterns import GlobPattern, compile_patterns, matches
from cachemanifest.file_scanner.scanner import DirectoryScanner, scan
from cachemanifest.file_scanner.types import ScanConfig

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_INCLUDES",
    "DirectoryScanner",
    "GlobPattern",
    "ScanConfig",
    "compile_patterns",
    "matches",
    "scan",
]
