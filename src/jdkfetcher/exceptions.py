"""Exception classes for JdkFetcher."""


class JdkFetcherError(Exception):
    """Base exception for JdkFetcher operations."""


class NetworkError(JdkFetcherError):
    """Raised when network operations fail."""


class CatalogUnavailableError(NetworkError):
    """Raised when the release catalog cannot be reached."""


class DownloadError(NetworkError):
    """Raised when a runtime archive cannot be downloaded."""


class CatalogMalformedError(JdkFetcherError):
    """Raised when a catalog response cannot be decoded."""


class ExtractionError(JdkFetcherError):
    """Raised when archive extraction fails."""


class InvalidVersionError(JdkFetcherError):
    """Raised when a version string has no usable major version."""
