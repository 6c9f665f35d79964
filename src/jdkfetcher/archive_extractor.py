"""Archive extractor implementation for JdkFetcher."""

import logging
import subprocess
import tarfile
import zipfile
from pathlib import Path
from typing import Dict

from .common import FileSystemClientProtocol
from .exceptions import ExtractionError
from .utils import format_bytes

logger = logging.getLogger(__name__)

ZIP_FORMAT = "zip"
TAR_FORMAT = "tar"

_TAR_SUFFIXES = (".tar.gz", ".tgz", ".tar.xz", ".txz", ".tar.bz2", ".tar")


class ArchiveExtractor:
    """Handles archive extraction for zip and tar based runtime images."""

    def __init__(self, file_system_client: FileSystemClientProtocol) -> None:
        self.file_system_client = file_system_client

    def detect_format(self, archive_path: Path) -> str:
        """
        Work out the archive format, first from the file name, then from its contents.

        Raises:
            ExtractionError: If the archive is neither zip nor tar
        """
        name = archive_path.name.lower()
        if name.endswith(".zip"):
            return ZIP_FORMAT
        if name.endswith(_TAR_SUFFIXES):
            return TAR_FORMAT

        if zipfile.is_zipfile(archive_path):
            return ZIP_FORMAT
        if self.is_tar_file(archive_path):
            return TAR_FORMAT
        raise ExtractionError(f"Unsupported archive format: {archive_path.name}")

    def is_tar_file(self, archive_path: Path) -> bool:
        """Check if the file is a tar file."""
        if archive_path.is_dir():
            return False
        try:
            return tarfile.is_tarfile(archive_path)
        except OSError:
            return False

    def get_archive_info(self, archive_path: Path) -> Dict[str, int]:
        """
        Get information about a tar archive without extracting it.

        Returns:
            Dictionary with archive info: {"file_count": int, "total_size": int}
        """
        try:
            with tarfile.open(archive_path, "r:*") as tar:
                members = tar.getmembers()
                return {
                    "file_count": len(members),
                    "total_size": sum(m.size for m in members),
                }
        except Exception as e:
            raise ExtractionError(f"Error reading archive: {e}") from e

    def extract_archive(self, archive_path: Path, target_dir: Path) -> Path:
        """Extract archive to the target directory.

        Args:
            archive_path: Path to the archive
            target_dir: Directory to extract into, created if absent

        Returns:
            Path to the target directory where archive was extracted

        Raises:
            ExtractionError: If extraction fails
        """
        archive_format = self.detect_format(archive_path)
        if archive_format == ZIP_FORMAT:
            return self.extract_with_zipfile(archive_path, target_dir)

        # Try tarfile first, fall back to system tar for anything it cannot read
        try:
            return self.extract_with_tarfile(archive_path, target_dir)
        except ExtractionError as e:
            logger.debug(f"tarfile extraction failed: {e}, falling back to system tar")
            return self._extract_with_system_tar(archive_path, target_dir)

    def extract_with_zipfile(self, archive_path: Path, target_dir: Path) -> Path:
        """Extract a zip archive, keeping the POSIX permissions stored in it."""
        self.file_system_client.mkdir(target_dir, parents=True, exist_ok=True)
        root = target_dir.resolve()

        try:
            with zipfile.ZipFile(archive_path) as archive:
                members = archive.infolist()
                for member in members:
                    destination = (root / member.filename).resolve()
                    if not destination.is_relative_to(root):
                        raise ExtractionError(
                            f"Refusing to extract {member.filename!r} outside {target_dir}"
                        )
                    archive.extract(member, root)

                    mode = (member.external_attr >> 16) & 0o777
                    if mode and not member.is_dir():
                        self.file_system_client.chmod(destination, mode)
        except ExtractionError:
            raise
        except Exception as e:
            # Corrupt members raise zlib.error, EOFError or NotImplementedError too
            logger.error(f"Error extracting archive: {e}")
            raise ExtractionError(f"Failed to extract archive {archive_path}: {e}") from e

        logger.info(f"Extracted {len(members)} entries from {archive_path.name}")
        return target_dir

    def extract_with_tarfile(self, archive_path: Path, target_dir: Path) -> Path:
        """Extract archive using tarfile library."""
        self.file_system_client.mkdir(target_dir, parents=True, exist_ok=True)

        archive_info = self.get_archive_info(archive_path)
        logger.info(
            f"Archive contains {archive_info['file_count']} files, "
            f"total size: {format_bytes(archive_info['total_size'])}"
        )

        try:
            with tarfile.open(archive_path, "r:*") as tar:
                tar.extractall(path=target_dir, filter="data")
        except (tarfile.TarError, OSError) as e:
            logger.error(f"Error extracting archive: {e}")
            raise ExtractionError(f"Failed to extract archive {archive_path}: {e}") from e

        logger.info(f"Extracted {archive_path.name} to {target_dir}")
        return target_dir

    def _extract_with_system_tar(self, archive_path: Path, target_dir: Path) -> Path:
        """Extract archive using system tar command."""
        self.file_system_client.mkdir(target_dir, parents=True, exist_ok=True)

        cmd = [
            "tar",
            "-xf",  # Extract tar (uncompressed, gz, or xz)
            str(archive_path),
            "-C",  # Extract to target directory
            str(target_dir),
        ]

        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise ExtractionError(f"Failed to extract archive {archive_path}: {e}") from e

        if result.returncode != 0:
            raise ExtractionError(
                f"Failed to extract archive {archive_path}: {result.stderr}"
            )

        return target_dir
