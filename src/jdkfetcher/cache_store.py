"""Local runtime cache for JdkFetcher."""

import logging
import threading
from pathlib import Path

from .archive_fetcher import ArchiveFetcher
from .common import (
    RUNTIME_DIR_PREFIX,
    STAGING_PREFIX,
    BinaryDescriptor,
    FileSystemClientProtocol,
)
from .utils import strip_archive_suffix

logger = logging.getLogger(__name__)

# Only one runtime is downloaded at a time, across every cache store in the
# process, so no two downloads or extractions ever interleave.
_download_lock = threading.Lock()


class CacheStore:
    """Maps binaries to cache directories and fills them on a miss.

    A cache entry is the directory cache_root/<file name without archive
    suffix>. Its presence is trusted unconditionally: there is no metadata,
    checksum or freshness check, and entries are never removed.
    """

    def __init__(
        self,
        cache_root: Path,
        archive_fetcher: ArchiveFetcher,
        file_system_client: FileSystemClientProtocol,
    ) -> None:
        self.cache_root = cache_root
        self.archive_fetcher = archive_fetcher
        self.file_system_client = file_system_client

    def cache_dir_for(self, descriptor: BinaryDescriptor) -> Path:
        """Return the cache entry directory of a binary."""
        return self.cache_root / strip_archive_suffix(Path(descriptor.file_name).name)

    def runtime_path(self, descriptor: BinaryDescriptor) -> Path:
        """Return the runtime image root inside the cache entry."""
        return self.cache_dir_for(descriptor) / f"{RUNTIME_DIR_PREFIX}{descriptor.version}"

    def is_cached(self, descriptor: BinaryDescriptor) -> bool:
        return self.file_system_client.exists(self.cache_dir_for(descriptor))

    def materialize(self, descriptor: BinaryDescriptor) -> Path:
        """Return the runtime path of a binary, downloading it on a cache miss.

        Cache hits return immediately without taking the download lock.
        Misses are serialized process-wide; the entry is checked again once
        the lock is held since another thread may have filled it meanwhile.

        Raises:
            DownloadError: If the archive cannot be downloaded
            ExtractionError: If the archive cannot be unpacked
        """
        if self.is_cached(descriptor):
            logger.debug(f"Cache hit for {descriptor.file_name}")
            return self.runtime_path(descriptor)

        with _download_lock:
            cache_dir = self.cache_dir_for(descriptor)
            if self.file_system_client.exists(cache_dir):
                logger.debug(f"{descriptor.file_name} was cached while waiting for the lock")
            else:
                logger.info(f"Cache miss for {descriptor.file_name}, fetching")
                self.archive_fetcher.fetch_and_extract(descriptor, cache_dir)

        return self.runtime_path(descriptor)

    def cached_entries(self) -> list[Path]:
        """List finished cache entries, ignoring in-progress staging directories."""
        if not self.file_system_client.is_dir(self.cache_root):
            return []
        return sorted(
            path
            for path in self.file_system_client.iterdir(self.cache_root)
            if self.file_system_client.is_dir(path)
            and not path.name.startswith(STAGING_PREFIX)
        )
