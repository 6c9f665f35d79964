"""Utility functions for JdkFetcher."""

import os
import platform
import re
from pathlib import Path

from .common import ARCHIVE_SUFFIXES, CACHE_DIR_ENV, CACHE_DIR_NAME, PlatformTuple
from .exceptions import InvalidVersionError

# Legacy versions carry a '1.' prefix: '1.8.0_192' is major version 8
MAJOR_VERSION_PATTERN = r"^v?(?:1\.(?=\d))?(\d+)"

_OS_NAMES = {
    "linux": "linux",
    "darwin": "mac",
    "windows": "windows",
    "aix": "aix",
    "sunos": "solaris",
}

_ARCH_NAMES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "ppc64le": "ppc64le",
    "ppc64": "ppc64",
    "s390x": "s390x",
    "armv7l": "arm",
    "i386": "x32",
    "i686": "x32",
    "x86": "x32",
}


def parse_major_version(version: str) -> int:
    """
    Extract the major version number from a runtime version string.

    Args:
        version: A version such as '11', '11.0.2', '11.0.2+9' or '1.8.0_192'

    Returns:
        The major version number (11, 11, 11 and 8 for the examples above)

    Raises:
        InvalidVersionError: If the string does not start with a version number
    """
    match = re.match(MAJOR_VERSION_PATTERN, version.strip())
    if not match:
        raise InvalidVersionError(f"Cannot determine major version of {version!r}")
    return int(match.group(1))


def strip_archive_suffix(file_name: str) -> str:
    """
    Remove known archive extensions from a file name.

    Every suffix in ARCHIVE_SUFFIXES is tried in turn; only a matching one
    is removed.

    Args:
        file_name: Archive file name (e.g., 'jdk-11.0.2_linux-x64.tar.gz')

    Returns:
        The bare name (e.g., 'jdk-11.0.2_linux-x64')
    """
    name = file_name
    for suffix in ARCHIVE_SUFFIXES:
        name = name.removesuffix(suffix)
    return name


def detect_platform() -> PlatformTuple:
    """Return the (os, arch) pair of the running host using catalog names."""
    system = platform.system().lower()
    machine = platform.machine().lower()
    return _OS_NAMES.get(system, system), _ARCH_NAMES.get(machine, machine)


def default_cache_dir() -> Path:
    """Resolve the default cache root.

    JDKFETCHER_CACHE_DIR wins, then $XDG_CACHE_HOME/jdkfetcher, then
    ~/.cache/jdkfetcher.
    """
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return Path(override).expanduser()

    xdg_cache_home = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache_home:
        return Path(xdg_cache_home) / CACHE_DIR_NAME
    return Path.home() / ".cache" / CACHE_DIR_NAME


def format_bytes(bytes_value: int) -> str:
    """Format bytes into a human-readable string."""
    if bytes_value < 1024:
        return f"{bytes_value} B"
    elif bytes_value < 1024 * 1024:
        return f"{bytes_value / 1024:.2f} KB"
    elif bytes_value < 1024 * 1024 * 1024:
        return f"{bytes_value / (1024 * 1024):.2f} MB"
    else:
        return f"{bytes_value / (1024 * 1024 * 1024):.2f} GB"
