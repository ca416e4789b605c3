"""
TOML-based config file loading for cachemanifest.

Searches for `.cachemanifest.toml`, `cachemanifest.toml`, or
`pyproject.toml [tool.cachemanifest]` walking up from the current directory.
Config values are merged with CLI flags using three-way precedence: explicit
CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from cachemanifest.errors import ConfigError
from cachemanifest.file_scanner import ScanConfig, compile_patterns
from cachemanifest.manifest import ManifestConfig

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

_logger = logging.getLogger(__name__)


@dataclass
class CacheManifestConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value". Paths are already resolved against the config file's
    directory.
    """

    # Paths
    output: Path | None = None
    input_directory: Path | None = None
    # Scanning
    includes: list[str] | None = None
    excludes: list[str] | None = None
    respect_gitignore: bool | None = None
    # Manifest content
    manifest_version: str | None = None
    additionals: list[str] | None = None
    network_resources: list[str] | None = None
    fallback: str | None = None
    omit_empty_network: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".cachemanifest.toml", "cachemanifest.toml", "pyproject.toml"]

_PATH_FIELDS = {"output", "input_directory"}
_STR_FIELDS = {"manifest_version", "fallback"}
_LIST_FIELDS = {"includes", "excludes", "additionals", "network_resources"}
_BOOL_FIELDS = {"respect_gitignore", "omit_empty_network"}

_VALID_FIELDS = {f.name for f in fields(CacheManifestConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.cachemanifest.toml` >
    `cachemanifest.toml` > `pyproject.toml` (only if it has `[tool.cachemanifest]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.cachemanifest] section."""
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return "cachemanifest" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> CacheManifestConfig:
    """
    Load a `CacheManifestConfig` from a TOML file. Supports both standalone
    `cachemanifest.toml` / `.cachemanifest.toml` and `pyproject.toml` (extracts
    `[tool.cachemanifest]`). TOML kebab-case keys are mapped to snake_case.

    Raises `ConfigError` if the file can't be read or parsed, or holds values
    of the wrong type.
    """
    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("cachemanifest", {})

    return _parse_config_data(data, base_dir=config_path.resolve().parent)


def _parse_config_data(data: dict[str, Any], base_dir: Path) -> CacheManifestConfig:
    """Parse a flat or sectioned TOML dict into CacheManifestConfig."""
    # Flatten sections: [scan] and [manifest] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key not in _VALID_FIELDS:
            _logger.debug("Ignoring unknown config key: %s", key)
            continue
        mapped[snake_key] = _check_value(key, snake_key, value, base_dir)

    return CacheManifestConfig(**mapped)


def _check_value(key: str, field_name: str, value: Any, base_dir: Path) -> Any:
    if field_name in _PATH_FIELDS:
        if not isinstance(value, str) or not value:
            raise ConfigError(f"Config key '{key}' must be a non-empty string path")
        path = Path(value)
        return path if path.is_absolute() else base_dir / path
    if field_name in _STR_FIELDS:
        # Allow `manifest-version = 3`
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ConfigError(f"Config key '{key}' must be a string")
        return str(value)
    if field_name in _LIST_FIELDS:
        if not isinstance(value, list) or not all(
            isinstance(v, str) for v in cast(list[Any], value)
        ):
            raise ConfigError(f"Config key '{key}' must be a list of strings")
        return list(cast(list[str], value))
    if field_name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigError(f"Config key '{key}' must be true or false")
        return value
    return value


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: CacheManifestConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(CacheManifestConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        # Skip if CLI explicitly set this flag
        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts


def build_scan_config(
    input_directory: str | Path | None,
    includes: Iterable[str] = (),
    excludes: Iterable[str] = (),
    respect_gitignore: bool = False,
) -> ScanConfig:
    """
    Validate scan settings and build the immutable `ScanConfig`.

    Raises `ConfigError` for a missing input directory, an input path that
    isn't a directory, or a malformed pattern.
    """
    if not input_directory:
        raise ConfigError(
            "No input directory specified (use --input-directory or 'input-directory' in config)"
        )
    root = Path(input_directory)
    if not root.exists():
        raise ConfigError(f"Input directory not found: {root}")
    if not root.is_dir():
        raise ConfigError(f"Input path is not a directory: {root}")
    return ScanConfig(
        root=root,
        includes=compile_patterns(includes),
        excludes=compile_patterns(excludes),
        respect_gitignore=respect_gitignore,
    )


def build_manifest_config(
    output: str | Path | None,
    manifest_version: str | None = None,
    additionals: Iterable[str] = (),
    network_resources: Iterable[str] | None = (),
    fallback: str | None = None,
    omit_empty_network: bool = False,
) -> ManifestConfig:
    """
    Validate manifest settings and build the immutable `ManifestConfig`.

    With `omit_empty_network`, an empty network list drops the `NETWORK:`
    section instead of rendering a bare header. Raises `ConfigError` if no
    output path is given.
    """
    if not output:
        raise ConfigError("No output manifest file specified (use --output or 'output' in config)")
    network = tuple(network_resources) if network_resources is not None else None
    if omit_empty_network and not network:
        network = None
    return ManifestConfig(
        output=Path(output),
        version=manifest_version or "",
        additionals=tuple(additionals),
        network_resources=network,
        fallback=fallback or "",
    )
