"""CLI implementation for JdkFetcher."""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .__version__ import __version__
from .common import DEFAULT_IMPLEMENTATION, DEFAULT_TIMEOUT, Implementation
from .exceptions import JdkFetcherError
from .jdk_fetcher import JdkFetcher
from .utils import detect_platform

logger = logging.getLogger(__name__)

# Exit status when the catalog has no matching release
EXIT_NOT_FOUND = 2


def _validate_mutually_exclusive_args(args: argparse.Namespace) -> None:
    """Validate mutually exclusive arguments."""
    if args.release and args.latest is not None:
        print("Error: --release and --latest cannot be used together")
        raise SystemExit(1)
    if args.ls and (args.release or args.latest is not None):
        print("Error: --ls cannot be used with --release or --latest")
        raise SystemExit(1)
    if not (args.ls or args.release or args.latest is not None):
        print("Error: one of --release, --latest or --ls is required")
        raise SystemExit(1)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    host_os, host_arch = detect_platform()

    parser = argparse.ArgumentParser(
        description="Download and cache AdoptOpenJDK runtime images."
    )
    parser.add_argument(
        "--release",
        "-r",
        metavar="VERSION",
        help="Exact release version to fetch (e.g., 11.0.2)",
    )
    parser.add_argument(
        "--latest",
        "-l",
        metavar="MAJOR",
        type=int,
        help="Fetch the latest release of a major version (e.g., 11)",
    )
    parser.add_argument(
        "--ls",
        action="store_true",
        help="List runtimes present in the cache directory",
    )
    parser.add_argument(
        "--os",
        default=host_os,
        help=f"Target operating system as named by the catalog (default: {host_os})",
    )
    parser.add_argument(
        "--arch",
        default=host_arch,
        help=f"Target architecture as named by the catalog (default: {host_arch})",
    )
    parser.add_argument(
        "--impl",
        default=DEFAULT_IMPLEMENTATION.value,
        choices=[impl.value for impl in Implementation],
        help=f"JVM implementation (default: {DEFAULT_IMPLEMENTATION.value})",
    )
    parser.add_argument(
        "--cache-dir",
        "-c",
        help="Cache directory (default: $XDG_CACHE_HOME/jdkfetcher)",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Network timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=__version__)

    args = parser.parse_args(argv)
    _validate_mutually_exclusive_args(args)
    return args


def setup_logging(debug: bool) -> None:
    """Set up logging based on debug flag."""
    log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
    )

    # basicConfig is a no-op when handlers already exist (pytest caplog)
    logging.getLogger().setLevel(log_level)

    if debug:
        logger.debug("Debug logging enabled")


def _handle_ls_operation_flow(fetcher: JdkFetcher) -> None:
    """Handle the --ls operation flow."""
    entries = fetcher.list_cached()
    print(f"Cached runtimes in {fetcher.cache_dir}:")
    if not entries:
        print("  (none)")
    for entry in entries:
        print(f"  {entry.name}")


def _handle_fetch_operation_flow(fetcher: JdkFetcher, args: argparse.Namespace) -> None:
    """Handle the --release and --latest operation flows."""
    impl = Implementation(args.impl)
    if args.release:
        requested = args.release
        runtime_path = fetcher.fetch(args.release, args.os, args.arch, impl)
    else:
        requested = f"latest openjdk{args.latest}"
        runtime_path = fetcher.fetch_latest(args.latest, args.os, args.arch, impl)

    if runtime_path is None:
        print(f"No matching release found for {requested} ({args.os}/{args.arch}, {impl})")
        raise SystemExit(EXIT_NOT_FOUND)

    print(runtime_path)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point."""
    args = parse_arguments(argv)
    setup_logging(args.debug)

    cache_dir = Path(args.cache_dir).expanduser() if args.cache_dir else None

    try:
        fetcher = JdkFetcher(cache_dir=cache_dir, timeout=args.timeout)

        if args.ls:
            _handle_ls_operation_flow(fetcher)
            return

        _handle_fetch_operation_flow(fetcher, args)
    except JdkFetcherError as e:
        print(f"Error: {e}")
        raise SystemExit(1) from e
