"""File system client implementation for JdkFetcher."""

import shutil
from pathlib import Path
from typing import Iterator


class FileSystemClient:
    """Concrete implementation of FileSystemClientProtocol.

    Provides filesystem operations using standard pathlib operations.
    """

    PROTOCOL_VERSION: str = "1.0"

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        path.mkdir(parents=parents, exist_ok=exist_ok)

    def rename(self, source: Path, target: Path) -> None:
        source.rename(target)

    def rmtree(self, path: Path) -> None:
        shutil.rmtree(path)

    def iterdir(self, path: Path) -> Iterator[Path]:
        return path.iterdir()

    def chmod(self, path: Path, mode: int) -> None:
        path.chmod(mode)
