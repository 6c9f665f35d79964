"""Version information for JdkFetcher."""

from importlib.metadata import PackageNotFoundError, version


def _get_version() -> str:
    """Get version from the installed package metadata."""
    try:
        return version("jdk-fetcher")
    except PackageNotFoundError:
        return "unknown"


__version__ = _get_version()
