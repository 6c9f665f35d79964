"""Release resolution for JdkFetcher."""

import logging
from typing import Optional

from .catalog_client import CatalogClient
from .common import DEFAULT_IMPLEMENTATION, BinaryDescriptor
from .utils import parse_major_version

logger = logging.getLogger(__name__)


class ReleaseResolver:
    """Selects a single binary from catalog results.

    A missing release is a normal outcome and is reported as None. Catalog
    errors are propagated unchanged.
    """

    def __init__(self, catalog_client: CatalogClient) -> None:
        self.catalog_client = catalog_client

    def resolve(
        self,
        version: str,
        platform: str,
        arch: str,
        implementation: str = DEFAULT_IMPLEMENTATION,
    ) -> Optional[BinaryDescriptor]:
        """Find the binary of an exact release version.

        Releases are scanned in catalog order and matched on the version
        token of their name ('jdk-11+9' matches '11'). Inside a matching
        release the first binary for platform/arch wins.

        Args:
            version: Exact version as it appears in the release name
            platform: Operating system as named by the catalog
            arch: Architecture as named by the catalog
            implementation: JVM implementation tag

        Returns:
            The matching binary, or None if the catalog has no such release

        Raises:
            InvalidVersionError: If no major version can be derived from version
            CatalogUnavailableError: If the catalog cannot be reached
            CatalogMalformedError: If the catalog response cannot be decoded
        """
        major_version = parse_major_version(version)
        releases = self.catalog_client.fetch_releases_by_major(
            major_version, implementation, platform, arch
        )

        for release in releases:
            if release.version_token != version:
                continue
            binary = release.find_binary(platform, arch)
            if binary is not None:
                logger.info(f"Resolved {version} ({platform}/{arch}) to {binary.file_name}")
                return binary

        logger.info(f"No release matches {version} for {platform}/{arch}")
        return None

    def resolve_latest(
        self,
        major_version: int,
        platform: str,
        arch: str,
        implementation: str = DEFAULT_IMPLEMENTATION,
    ) -> Optional[BinaryDescriptor]:
        """Find the binary of the latest release of a major version.

        Returns:
            The matching binary, or None if the latest release has no
            binary for platform/arch
        """
        release = self.catalog_client.fetch_latest_release(
            major_version, implementation, platform, arch
        )

        binary = release.find_binary(platform, arch)
        if binary is None:
            logger.info(
                f"Latest release {release.name} has no binary for {platform}/{arch}"
            )
            return None

        logger.info(f"Resolved latest openjdk{major_version} to {binary.file_name}")
        return binary
