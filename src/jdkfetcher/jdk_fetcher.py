"""JDK runtime fetcher wiring catalog lookup, resolution and caching together."""

import logging
import shutil
from pathlib import Path
from typing import Optional

from .archive_extractor import ArchiveExtractor
from .archive_fetcher import ArchiveFetcher
from .cache_store import CacheStore
from .catalog_client import CatalogClient
from .common import (
    CATALOG_BASE_URL,
    DEFAULT_IMPLEMENTATION,
    DEFAULT_TIMEOUT,
    BinaryDescriptor,
    FileSystemClientProtocol,
    NetworkClientProtocol,
    PlatformTuple,
)
from .exceptions import NetworkError
from .filesystem import FileSystemClient
from .network import NetworkClient
from .release_resolver import ReleaseResolver
from .utils import default_cache_dir, detect_platform

logger = logging.getLogger(__name__)


class JdkFetcher:
    """Resolves, downloads and caches JDK runtime images."""

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        timeout: int = DEFAULT_TIMEOUT,
        catalog_client: Optional[NetworkClientProtocol] = None,
        download_client: Optional[NetworkClientProtocol] = None,
        file_system_client: Optional[FileSystemClientProtocol] = None,
        catalog_url: str = CATALOG_BASE_URL,
    ) -> None:
        self.timeout = timeout
        self.cache_dir = Path(cache_dir or default_cache_dir()).expanduser().absolute()

        # Catalog queries and archive downloads go through separate transports
        self.catalog_network_client = catalog_client or NetworkClient(timeout=timeout)
        self.download_network_client = download_client or NetworkClient(timeout=timeout)
        self.file_system_client = file_system_client or FileSystemClient()

        self.catalog = CatalogClient(self.catalog_network_client, catalog_url)
        self.resolver = ReleaseResolver(self.catalog)
        self.archive_extractor = ArchiveExtractor(self.file_system_client)
        self.archive_fetcher = ArchiveFetcher(
            self.download_network_client,
            self.archive_extractor,
            self.file_system_client,
        )
        self.cache_store = CacheStore(
            self.cache_dir, self.archive_fetcher, self.file_system_client
        )

    def _validate_environment(self) -> None:
        """Validate that required tools are available."""
        if shutil.which("curl") is None:
            raise NetworkError("curl is not available")

    def _platform(self, platform: Optional[str], arch: Optional[str]) -> PlatformTuple:
        host_platform, host_arch = detect_platform()
        return platform or host_platform, arch or host_arch

    def find_release(
        self,
        version: str,
        platform: Optional[str] = None,
        arch: Optional[str] = None,
        implementation: str = DEFAULT_IMPLEMENTATION,
    ) -> Optional[BinaryDescriptor]:
        """Resolve an exact version without downloading anything."""
        platform, arch = self._platform(platform, arch)
        return self.resolver.resolve(version, platform, arch, implementation)

    def find_latest_release(
        self,
        major_version: int,
        platform: Optional[str] = None,
        arch: Optional[str] = None,
        implementation: str = DEFAULT_IMPLEMENTATION,
    ) -> Optional[BinaryDescriptor]:
        """Resolve the latest release of a major version without downloading anything."""
        platform, arch = self._platform(platform, arch)
        return self.resolver.resolve_latest(major_version, platform, arch, implementation)

    def fetch(
        self,
        version: str,
        platform: Optional[str] = None,
        arch: Optional[str] = None,
        implementation: str = DEFAULT_IMPLEMENTATION,
    ) -> Optional[Path]:
        """Fetch an exact runtime version.

        Args:
            version: Release version (e.g., '11.0.2')
            platform: Catalog OS name, defaults to the running host
            arch: Catalog architecture name, defaults to the running host
            implementation: JVM implementation tag

        Returns:
            Path to the unpacked runtime image, or None if the catalog has no
            matching release

        Raises:
            JdkFetcherError: If the catalog, download or extraction fails
        """
        self._validate_environment()
        descriptor = self.find_release(version, platform, arch, implementation)
        if descriptor is None:
            return None
        return self._materialize(descriptor)

    def fetch_latest(
        self,
        major_version: int,
        platform: Optional[str] = None,
        arch: Optional[str] = None,
        implementation: str = DEFAULT_IMPLEMENTATION,
    ) -> Optional[Path]:
        """Fetch the latest runtime of a major version.

        Returns:
            Path to the unpacked runtime image, or None if no binary exists
            for the platform
        """
        self._validate_environment()
        descriptor = self.find_latest_release(major_version, platform, arch, implementation)
        if descriptor is None:
            return None
        return self._materialize(descriptor)

    def _materialize(self, descriptor: BinaryDescriptor) -> Path:
        runtime_path = self.cache_store.materialize(descriptor)
        logger.info(f"Runtime available at {runtime_path}")
        return runtime_path

    def list_cached(self) -> list[Path]:
        """List the cache entries present under the cache directory."""
        return self.cache_store.cached_entries()
