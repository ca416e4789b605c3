#!/usr/bin/env python3
"""
cachemanifest: Generate HTML5 application cache manifests from a directory tree

Common usage:
  cachemanifest -i webapp -o webapp/app.appcache
  cachemanifest -i webapp -o out/app.appcache --include '**/*.*' --exclude '**/*.map'
  cachemanifest -i webapp --list-files

Settings can also come from `.cachemanifest.toml`, `cachemanifest.toml`, or
`[tool.cachemanifest]` in `pyproject.toml`. Explicit flags override config values.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from cachemanifest.api import generate_manifest
from cachemanifest.config import (
    build_manifest_config,
    build_scan_config,
    find_config_file,
    load_config,
    merge_cli_with_config,
)
from cachemanifest.errors import CacheManifestError, ConfigError
from cachemanifest.file_scanner import DirectoryScanner

_logger = logging.getLogger(__name__)

# Flags whose explicit presence on the command line beats the config file.
# argparse dest name -> Options field name
_TRACKED_FLAGS: dict[str, str] = {
    "output": "output",
    "input_directory": "input_directory",
    "manifest_version": "manifest_version",
    "include": "includes",
    "exclude": "excludes",
    "additional": "additionals",
    "network": "network_resources",
    "fallback": "fallback",
    "respect_gitignore": "respect_gitignore",
    "omit_empty_network": "omit_empty_network",
}


@dataclass
class Options:
    """Command-line options for the cachemanifest tool."""

    output: str | Path | None = None
    input_directory: str | Path | None = None
    manifest_version: str | None = None
    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)
    additionals: list[str] = field(default_factory=list)
    network_resources: list[str] = field(default_factory=list)
    fallback: str | None = None
    respect_gitignore: bool = False
    omit_empty_network: bool = False
    config: str | None = None
    list_files: bool = False
    verbosity: int = 0
    version: bool = False


def _build_parser(track_explicit: bool = False) -> argparse.ArgumentParser:
    """
    Build the argument parser. With `track_explicit`, every option
    defaults to `SUPPRESS`, so the parsed namespace holds only the flags the
    user actually passed.
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")

    def default(value: object) -> object:
        return argparse.SUPPRESS if track_explicit else value

    parser = argparse.ArgumentParser(
        prog="cachemanifest",
        description=doc_parts[0],
        epilog="\n\n".join(doc_parts[1:]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=not track_explicit,
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=default(None),
        help="Manifest file to generate (parent directories are created)",
    )
    parser.add_argument(
        "-i",
        "--input-directory",
        type=str,
        dest="input_directory",
        default=default(None),
        metavar="DIR",
        help="Directory to scan for files to list",
    )
    parser.add_argument(
        "--manifest-version",
        type=str,
        dest="manifest_version",
        default=default(None),
        metavar="LABEL",
        help="Version label written to the header; change it to make clients refetch everything",
    )
    parser.add_argument(
        "--include",
        action="append",
        default=default([]),
        metavar="PATTERN",
        help="Glob of files to list, relative to the input directory (e.g. '**/*.html'). "
        "Can be repeated. Default: all files",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=default([]),
        metavar="PATTERN",
        help="Glob of files to leave out (e.g. '**/*.map'). Can be repeated",
    )
    parser.add_argument(
        "--additional",
        action="append",
        default=default([]),
        metavar="ENTRY",
        help="Extra literal cache entry that is not a scanned file. Can be repeated",
    )
    parser.add_argument(
        "--network",
        action="append",
        default=default([]),
        metavar="RESOURCE",
        help="Resource listed under NETWORK: (always fetched from the network). Can be repeated",
    )
    parser.add_argument(
        "--fallback",
        type=str,
        default=default(None),
        metavar="EXPR",
        help="Fallback expression written under FALLBACK: (e.g. '/ /offline.html')",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        dest="respect_gitignore",
        default=default(False),
        help="Skip files and directories ignored by .gitignore files under the input directory",
    )
    parser.add_argument(
        "--omit-empty-network",
        action="store_true",
        dest="omit_empty_network",
        default=default(False),
        help="Leave out the NETWORK: header when no network resources are configured",
    )
    # Untracked options are registered in both modes so that short-flag clusters
    # like `-vi DIR` parse identically; they are filtered out of explicit flags.
    parser.add_argument(
        "--config",
        type=str,
        default=default(None),
        metavar="FILE",
        help="Read settings from this TOML file instead of searching for one",
    )
    parser.add_argument(
        "--list-files",
        action="store_true",
        dest="list_files",
        default=default(False),
        help="Print the matched files (relative paths) without writing a manifest",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=default(0),
        help="Log more detail to stderr (-v for progress, -vv for debug)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default(False),
        help="Only log errors",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        default=default(False),
        help="Show version information and exit",
    )
    return parser


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which settings the user explicitly passed (for config merge precedence).
    """
    argv = args if args is not None else sys.argv[1:]
    opts = _build_parser().parse_args(argv)

    # Re-parse with suppressed defaults to detect which flags were actually supplied.
    explicit_opts, _ = _build_parser(track_explicit=True).parse_known_args(argv)
    explicit_flags = {
        _TRACKED_FLAGS[dest] for dest in vars(explicit_opts) if dest in _TRACKED_FLAGS
    }

    return (
        Options(
            output=opts.output,
            input_directory=opts.input_directory,
            manifest_version=opts.manifest_version,
            includes=opts.include,
            excludes=opts.exclude,
            additionals=opts.additional,
            network_resources=opts.network,
            fallback=opts.fallback,
            respect_gitignore=opts.respect_gitignore,
            omit_empty_network=opts.omit_empty_network,
            config=opts.config,
            list_files=opts.list_files,
            verbosity=-1 if opts.quiet else opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _configure_logging(verbosity: int) -> None:
    """Send `cachemanifest` log records to stderr at a level set by -v/-q."""
    if verbosity < 0:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logger = logging.getLogger("cachemanifest")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)


def _apply_config_file(options: Options, explicit_flags: set[str]) -> None:
    """Find (or use the given) config file and merge it under explicit CLI flags."""
    if options.config:
        config_path: Path | None = Path(options.config)
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        config_path = find_config_file(Path.cwd())
    if config_path is None:
        return
    _logger.debug("Using config file %s", config_path)
    merge_cli_with_config(options, load_config(config_path), explicit_flags)


def _run(options: Options) -> None:
    scan_config = build_scan_config(
        options.input_directory,
        includes=options.includes,
        excludes=options.excludes,
        respect_gitignore=options.respect_gitignore,
    )

    if options.list_files:
        for rel_path in DirectoryScanner(scan_config).scan():
            print(rel_path)
        return

    manifest_config = build_manifest_config(
        options.output,
        manifest_version=options.manifest_version,
        additionals=options.additionals,
        network_resources=options.network_resources,
        fallback=options.fallback,
        omit_empty_network=options.omit_empty_network,
    )
    result = generate_manifest(scan_config, manifest_config)
    _logger.info("Manifest written to %s", result.output)


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the cachemanifest CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 for configuration errors, 2 for scan or
        write failures)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("cachemanifest")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _configure_logging(options.verbosity)

    try:
        _apply_config_file(options, explicit_flags)
        _run(options)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except CacheManifestError as e:
        # ScanError or WriteError
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
