"""Archive download and extraction for JdkFetcher."""

import logging
import tempfile
from pathlib import Path

from .common import (
    CACHE_DIR_MODE,
    STAGING_PREFIX,
    USER_AGENT,
    ArchiveExtractorProtocol,
    BinaryDescriptor,
    FileSystemClientProtocol,
    NetworkClientProtocol,
)
from .exceptions import DownloadError, ExtractionError

logger = logging.getLogger(__name__)


class ArchiveFetcher:
    """Downloads a runtime archive to scratch space and unpacks it into the cache.

    The scratch directory is removed on every exit path. Extraction goes to
    a staging directory beside the destination which is renamed into place
    only once the extractor succeeds, so a failed run never leaves a
    directory that looks like a finished cache entry.
    """

    def __init__(
        self,
        network_client: NetworkClientProtocol,
        archive_extractor: ArchiveExtractorProtocol,
        file_system_client: FileSystemClientProtocol,
    ) -> None:
        self.network_client = network_client
        self.archive_extractor = archive_extractor
        self.file_system_client = file_system_client

    def download(self, descriptor: BinaryDescriptor, output_path: Path) -> Path:
        """Download the descriptor's archive to output_path.

        Raises:
            DownloadError: If the transport fails
        """
        logger.info(f"Downloading {descriptor.file_name} from {descriptor.link}")
        headers = {"User-Agent": USER_AGENT}

        try:
            result = self.network_client.download(
                descriptor.link, output_path, headers=headers
            )
        except Exception as e:
            raise DownloadError(f"Failed to download {descriptor.file_name}: {e}") from e

        if result.returncode != 0:
            if "404" in result.stderr or "not found" in result.stderr.lower():
                raise DownloadError(f"Archive not found: {descriptor.link}")
            raise DownloadError(
                f"Failed to download {descriptor.file_name}: {result.stderr.strip()}"
            )

        logger.info(f"Downloaded archive to: {output_path}")
        return output_path

    def _extract_into_place(self, archive_path: Path, destination_dir: Path) -> None:
        """Extract into a staging directory, then rename it to destination_dir."""
        parent = destination_dir.parent
        self.file_system_client.mkdir(parent, parents=True, exist_ok=True)
        staging_dir = Path(
            tempfile.mkdtemp(prefix=f"{STAGING_PREFIX}{destination_dir.name}-", dir=parent)
        )

        try:
            self.archive_extractor.extract_archive(archive_path, staging_dir)
            # mkdtemp creates 0700 directories
            self.file_system_client.chmod(staging_dir, CACHE_DIR_MODE)
            self.file_system_client.rename(staging_dir, destination_dir)
        except ExtractionError:
            self._discard(staging_dir)
            raise
        except OSError as e:
            self._discard(staging_dir)
            raise ExtractionError(
                f"Failed to move extracted archive into {destination_dir}: {e}"
            ) from e
        except BaseException:
            self._discard(staging_dir)
            raise

    def _discard(self, staging_dir: Path) -> None:
        if self.file_system_client.exists(staging_dir):
            self.file_system_client.rmtree(staging_dir)

    def fetch_and_extract(
        self, descriptor: BinaryDescriptor, destination_dir: Path
    ) -> Path:
        """Download a runtime archive and extract it to destination_dir.

        Args:
            descriptor: The binary to fetch
            destination_dir: Cache entry directory, must not exist yet

        Returns:
            destination_dir

        Raises:
            DownloadError: If the download fails
            ExtractionError: If the archive cannot be unpacked
        """
        with tempfile.TemporaryDirectory(prefix="jdkfetcher-") as scratch:
            archive_path = Path(scratch) / Path(descriptor.file_name).name
            self.download(descriptor, archive_path)
            self._extract_into_place(archive_path, destination_dir)

        logger.info(f"Extracted {descriptor.file_name} to {destination_dir}")
        return destination_dir
