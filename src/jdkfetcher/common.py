"""Common types, protocols, and constants for JdkFetcher."""

from __future__ import annotations

import dataclasses
import subprocess
from enum import StrEnum
from pathlib import Path
from typing import Iterator, Optional, Protocol


class Implementation(StrEnum):
    HOTSPOT = "hotspot"
    OPENJ9 = "openj9"


# Type aliases for better readability
Headers = dict[str, str]
ProcessResult = subprocess.CompletedProcess[str]
PlatformTuple = tuple[str, str]  # (os, arch) as named by the catalog


@dataclasses.dataclass(frozen=True)
class BinaryDescriptor:
    """One downloadable runtime archive for a single platform.

    Attributes:
        file_name: Archive file name, e.g. 'OpenJDK11U-jdk_x64_linux_hotspot_11.0.2_9.tar.gz'
        platform: Operating system as named by the catalog (linux, mac, windows, ...)
        arch: Architecture as named by the catalog (x64, aarch64, ...)
        link: Direct download URL of the archive
        version: Runtime version, used for the 'jdk-<version>' directory inside the archive
    """

    file_name: str
    platform: str
    arch: str
    link: str
    version: str

    def matches(self, platform: str, arch: str) -> bool:
        return self.platform == platform and self.arch == arch


@dataclasses.dataclass(frozen=True)
class ReleaseCatalogEntry:
    """A named catalog release, e.g. 'jdk-11+9', and its binaries."""

    name: str
    binaries: tuple[BinaryDescriptor, ...] = ()

    @property
    def version_token(self) -> Optional[str]:
        """Version token of the release name.

        The token sits between a fixed 4 character prefix ('jdk-') and the
        first '+'. Names without a '+' have no token.
        """
        separator = self.name.find("+")
        if separator == -1:
            return None
        return self.name[4:separator]

    def find_binary(self, platform: str, arch: str) -> Optional[BinaryDescriptor]:
        """Return the first binary built for platform/arch, if any."""
        for binary in self.binaries:
            if binary.matches(platform, arch):
                return binary
        return None


ReleaseList = list[ReleaseCatalogEntry]


class NetworkClientProtocol(Protocol):
    """Protocol for network operations with timeout support.

    Two transports are used by the pipeline: one for catalog queries and one
    for archive downloads. Both follow this protocol so either can be
    swapped (proxying, extra headers) without touching the core.

    Attributes:
        timeout: Maximum timeout in seconds for network operations
        PROTOCOL_VERSION: Version identifier for protocol compatibility
    """

    timeout: int
    PROTOCOL_VERSION: str = "1.0"

    def get(self, url: str, headers: Optional[Headers] = None) -> ProcessResult:
        """Perform HTTP GET request.

        Args:
            url: URL to request
            headers: Optional request headers as key-value pairs

        Returns:
            ProcessResult containing stdout, stderr, and returncode

        Example:
            >>> result = network_client.get("https://api.adoptopenjdk.net/v2/info/releases/openjdk11")
            >>> print(result.stdout)
        """
        ...

    def download(
        self, url: str, output_path: Path, headers: Optional[Headers] = None
    ) -> ProcessResult:
        """Download file from URL to specified path.

        Args:
            url: URL to download from
            output_path: Destination path for downloaded file
            headers: Optional request headers as key-value pairs

        Returns:
            ProcessResult containing download status and any error output
        """
        ...


class FileSystemClientProtocol(Protocol):
    """Protocol for filesystem operations.

    Attributes:
        PROTOCOL_VERSION: Version identifier for protocol compatibility
    """

    PROTOCOL_VERSION: str = "1.0"

    def exists(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    def mkdir(
        self, path: Path, parents: bool = False, exist_ok: bool = False
    ) -> None: ...

    def rename(self, source: Path, target: Path) -> None: ...

    def rmtree(self, path: Path) -> None: ...

    def iterdir(self, path: Path) -> Iterator[Path]: ...

    def chmod(self, path: Path, mode: int) -> None: ...


class ArchiveExtractorProtocol(Protocol):
    """Protocol for format-agnostic archive extraction."""

    def extract_archive(self, archive_path: Path, target_dir: Path) -> Path:
        """Extract archive_path into target_dir, creating it if absent.

        Raises:
            ExtractionError: If the archive cannot be decoded or unpacked
        """
        ...


# Constants
DEFAULT_TIMEOUT = 30
CATALOG_BASE_URL = "https://api.adoptopenjdk.net/v2/info/releases"
DEFAULT_IMPLEMENTATION: Implementation = Implementation.HOTSPOT
RUNTIME_DIR_PREFIX = "jdk-"
CACHE_DIR_NAME = "jdkfetcher"
CACHE_DIR_ENV = "JDKFETCHER_CACHE_DIR"
STAGING_PREFIX = ".staging-"
USER_AGENT = "jdk-fetcher"

# Permissions of a finished cache entry directory
CACHE_DIR_MODE = 0o755

# Suffixes stripped from archive names to form cache directory names
ARCHIVE_SUFFIXES: tuple[str, ...] = (".zip", ".tar.gz")
