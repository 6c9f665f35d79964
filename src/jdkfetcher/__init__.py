"""JdkFetcher: resolve, download and cache AdoptOpenJDK runtime images."""

from .__version__ import __version__
from .archive_extractor import ArchiveExtractor
from .archive_fetcher import ArchiveFetcher
from .cache_store import CacheStore
from .catalog_client import CatalogClient
from .common import BinaryDescriptor, Implementation, ReleaseCatalogEntry
from .exceptions import (
    CatalogMalformedError,
    CatalogUnavailableError,
    DownloadError,
    ExtractionError,
    InvalidVersionError,
    JdkFetcherError,
    NetworkError,
)
from .filesystem import FileSystemClient
from .jdk_fetcher import JdkFetcher
from .network import NetworkClient
from .release_resolver import ReleaseResolver

__all__ = [
    "__version__",
    "ArchiveExtractor",
    "ArchiveFetcher",
    "BinaryDescriptor",
    "CacheStore",
    "CatalogClient",
    "CatalogMalformedError",
    "CatalogUnavailableError",
    "DownloadError",
    "ExtractionError",
    "FileSystemClient",
    "Implementation",
    "InvalidVersionError",
    "JdkFetcher",
    "JdkFetcherError",
    "NetworkClient",
    "NetworkError",
    "ReleaseCatalogEntry",
    "ReleaseResolver",
]
