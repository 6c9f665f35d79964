"""Release catalog client for JdkFetcher."""

import json
import logging
import urllib.parse
from typing import Any

from .common import (
    CATALOG_BASE_URL,
    USER_AGENT,
    BinaryDescriptor,
    NetworkClientProtocol,
    ProcessResult,
    ReleaseCatalogEntry,
    ReleaseList,
)
from .exceptions import CatalogMalformedError, CatalogUnavailableError

logger = logging.getLogger(__name__)


class CatalogClient:
    """Queries the AdoptOpenJDK release catalog.

    Stateless: every call issues exactly one GET and decodes the JSON body
    into ReleaseCatalogEntry/BinaryDescriptor values. There is no retry
    here; callers decide whether a failure is worth repeating.
    """

    def __init__(
        self,
        network_client: NetworkClientProtocol,
        base_url: str = CATALOG_BASE_URL,
    ) -> None:
        self.network_client = network_client
        self.base_url = base_url.rstrip("/")

    def build_url(
        self,
        major_version: int,
        implementation: str,
        platform: str,
        arch: str,
        latest: bool = False,
    ) -> str:
        """Build the catalog query URL for a major version."""
        params = {
            "openjdk_impl": str(implementation),
            "os": platform,
            "arch": arch,
            "type": "jdk",
        }
        if latest:
            params["release"] = "latest"
        return f"{self.base_url}/openjdk{major_version}?{urllib.parse.urlencode(params)}"

    def _query(self, url: str) -> Any:
        """GET a catalog URL and return the decoded JSON document.

        Raises:
            CatalogUnavailableError: If the request itself fails
            CatalogMalformedError: If the body is not valid UTF-8 JSON
        """
        logger.debug(f"Querying release catalog: {url}")
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}

        try:
            response: ProcessResult = self.network_client.get(url, headers=headers)
        except UnicodeDecodeError as e:
            # The transport decodes the body as text, so bad bytes surface here
            raise CatalogMalformedError(
                f"Failed to decode catalog response from {url}: {e}"
            ) from e
        except Exception as e:
            raise CatalogUnavailableError(f"Failed to query catalog {url}: {e}") from e

        if response.returncode != 0:
            raise CatalogUnavailableError(
                f"Failed to query catalog {url}: {response.stderr.strip()}"
            )

        try:
            return json.loads(response.stdout)
        except json.JSONDecodeError as e:
            logger.debug(f"Failed to parse catalog response: {e}")
            raise CatalogMalformedError(
                f"Failed to parse catalog response from {url}: {e}"
            ) from e

    def _decode_binary(self, data: Any) -> BinaryDescriptor:
        try:
            return BinaryDescriptor(
                file_name=_require_str(data, "binary_name"),
                platform=_require_str(data, "os"),
                arch=_require_str(data, "architecture"),
                link=_require_str(data, "binary_link"),
                version=_require_str(data["version_data"], "openjdk_version"),
            )
        except (KeyError, TypeError) as e:
            raise CatalogMalformedError(f"Malformed binary entry: {e!r}") from e

    def _decode_release(self, data: Any) -> ReleaseCatalogEntry:
        if not isinstance(data, dict):
            raise CatalogMalformedError(
                f"Expected a release object, got {type(data).__name__}"
            )
        try:
            name = _require_str(data, "release_name")
        except (KeyError, TypeError) as e:
            raise CatalogMalformedError(f"Malformed release entry: {e!r}") from e

        binaries = data.get("binaries") or []
        if not isinstance(binaries, list):
            raise CatalogMalformedError(f"Release {name} has a non-list 'binaries'")

        return ReleaseCatalogEntry(
            name=name,
            binaries=tuple(self._decode_binary(binary) for binary in binaries),
        )

    def fetch_releases_by_major(
        self, major_version: int, implementation: str, platform: str, arch: str
    ) -> ReleaseList:
        """Fetch every release of a major version.

        Args:
            major_version: Major version to query (e.g., 11)
            implementation: JVM implementation tag (hotspot, openj9)
            platform: Operating system as named by the catalog
            arch: Architecture as named by the catalog

        Returns:
            Releases in catalog order

        Raises:
            CatalogUnavailableError: If the catalog cannot be reached
            CatalogMalformedError: If the response is not a list of releases
        """
        url = self.build_url(major_version, implementation, platform, arch)
        data = self._query(url)

        if not isinstance(data, list):
            raise CatalogMalformedError(
                f"Expected a list of releases from {url}, got {type(data).__name__}"
            )

        releases = [self._decode_release(item) for item in data]
        logger.debug(f"Catalog returned {len(releases)} releases for openjdk{major_version}")
        return releases

    def fetch_latest_release(
        self, major_version: int, implementation: str, platform: str, arch: str
    ) -> ReleaseCatalogEntry:
        """Fetch the latest release of a major version.

        Raises:
            CatalogUnavailableError: If the catalog cannot be reached
            CatalogMalformedError: If the response is not a release object
        """
        url = self.build_url(major_version, implementation, platform, arch, latest=True)
        release = self._decode_release(self._query(url))
        logger.debug(f"Latest release for openjdk{major_version}: {release.name}")
        return release


def _require_str(data: Any, key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value
