"""Exception types raised by cachemanifest."""

from __future__ import annotations


class CacheManifestError(Exception):
    """Base class for all cachemanifest failures."""


class ConfigError(CacheManifestError):
    """
    Invalid or incomplete configuration: missing required paths, an input
    directory that isn't a directory, bad TOML, or a malformed glob pattern.
    Raised before any scanning starts.
    """


class ScanError(CacheManifestError):
    """The scan root is unusable or the directory walk failed partway through."""


class WriteError(CacheManifestError):
    """Creating the manifest's parent directories or writing the file failed."""
