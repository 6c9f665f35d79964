"""
Shared pytest configuration and fixtures for jdkfetcher tests.
"""

import io
import json
import subprocess
import sys
import tarfile
import zipfile
from pathlib import Path

import pytest

# Add src to path for testing
parent_dir = Path(__file__).parent.parent
sys.path.insert(0, str(parent_dir / "src"))

from jdkfetcher.common import BinaryDescriptor  # noqa: E402


def completed(returncode: int = 0, stdout: str = "", stderr: str = ""):
    """Build a curl-like process result."""
    return subprocess.CompletedProcess(
        args=["curl"], returncode=returncode, stdout=stdout, stderr=stderr
    )


def binary_json(
    file_name: str = "OpenJDK11U-jdk_x64_linux_hotspot_11.0.2_9.tar.gz",
    os_name: str = "linux",
    arch: str = "x64",
    version: str = "11.0.2",
    link: str | None = None,
) -> dict:
    """A binary entry as served by the catalog."""
    return {
        "binary_name": file_name,
        "os": os_name,
        "architecture": arch,
        "binary_link": link or f"https://github.com/AdoptOpenJDK/releases/download/{file_name}",
        "version_data": {"openjdk_version": version},
    }


def release_json(name: str, binaries: list[dict]) -> dict:
    """A release entry as served by the catalog."""
    return {"release_name": name, "binaries": binaries}


@pytest.fixture
def make_result():
    return completed


@pytest.fixture
def make_binary():
    return binary_json


@pytest.fixture
def make_release():
    return release_json


@pytest.fixture
def TEST_DATA():
    """Centralized catalog data for resolution scenarios."""
    linux = binary_json("jdk-11_linux-x64.tar.gz", "linux", "x64", "11")
    windows = binary_json("jdk-11_windows-x64.zip", "windows", "x64", "11")
    mac = binary_json("jdk-11_mac-x64.tar.gz", "mac", "x64", "11")
    return {
        "RELEASES": [
            release_json("jdk-11+9", [linux, windows, mac]),
            release_json(
                "jdk-11.0.2+9",
                [binary_json("jdk-11.0.2_linux-x64.tar.gz", "linux", "x64", "11.0.2")],
            ),
        ],
        "LATEST": release_json(
            "jdk-11.0.2+9",
            [
                binary_json("jdk-11.0.2_linux-x64.tar.gz", "linux", "x64", "11.0.2"),
                binary_json("jdk-11.0.2_windows-x64.zip", "windows", "x64", "11.0.2"),
            ],
        ),
    }


@pytest.fixture
def catalog_response(TEST_DATA):
    """Successful catalog responses encoded the way curl returns them."""
    return {
        "releases": completed(stdout=json.dumps(TEST_DATA["RELEASES"])),
        "latest": completed(stdout=json.dumps(TEST_DATA["LATEST"])),
    }


@pytest.fixture
def linux_descriptor():
    return BinaryDescriptor(
        file_name="jdk-11.0.2_linux-x64.tar.gz",
        platform="linux",
        arch="x64",
        link="https://example.com/jdk-11.0.2_linux-x64.tar.gz",
        version="11.0.2",
    )


@pytest.fixture
def windows_descriptor():
    return BinaryDescriptor(
        file_name="jdk-11.0.2_windows-x64.zip",
        platform="windows",
        arch="x64",
        link="https://example.com/jdk-11.0.2_windows-x64.zip",
        version="11.0.2",
    )


@pytest.fixture
def mock_network_client(mocker):
    """Create a mocked NetworkClient instance."""
    from jdkfetcher.network import NetworkClient

    mock = mocker.MagicMock(spec=NetworkClient)
    mock.timeout = 30
    return mock


@pytest.fixture
def create_test_archive():
    """Helper fixture to create real archive files for testing.

    Files map archive member names to (content, mode) or plain content.
    """

    def _create_test_archive(
        archive_path: Path, format_extension: str, files: dict | None = None
    ) -> Path:
        if files is None:
            files = {"jdk-11.0.2/release": b'JAVA_VERSION="11.0.2"\n'}

        entries = {
            name: value if isinstance(value, tuple) else (value, 0o644)
            for name, value in files.items()
        }

        if format_extension == ".zip":
            with zipfile.ZipFile(archive_path, "w") as archive:
                for name, (content, mode) in entries.items():
                    info = zipfile.ZipInfo(name)
                    info.external_attr = (0o100000 | mode) << 16
                    archive.writestr(info, content)
        else:
            tar_mode = {".tar.gz": "w:gz", ".tar.xz": "w:xz"}.get(format_extension, "w")
            with tarfile.open(archive_path, tar_mode) as archive:
                for name, (content, mode) in entries.items():
                    info = tarfile.TarInfo(name=name)
                    info.size = len(content)
                    info.mode = mode
                    archive.addfile(info, io.BytesIO(content))

        return archive_path

    return _create_test_archive


@pytest.fixture
def jdk_archive(tmp_path, create_test_archive):
    """A small runtime image laid out like an AdoptOpenJDK tarball."""
    source = tmp_path / "source"
    source.mkdir()
    return create_test_archive(
        source / "jdk-11.0.2_linux-x64.tar.gz",
        ".tar.gz",
        {
            "jdk-11.0.2/bin/java": (b"#!/bin/sh\necho java\n", 0o755),
            "jdk-11.0.2/release": (b'JAVA_VERSION="11.0.2"\n', 0o644),
        },
    )


@pytest.fixture
def serve_archive(mock_network_client):
    """Make the mocked download transport write a given archive to its output path.

    Returns a list that collects every output path the transport was asked to write.
    """
    written: list[Path] = []

    def _serve(archive: Path):
        def _download(url, output_path, headers=None):
            written.append(output_path)
            output_path.write_bytes(archive.read_bytes())
            return completed()

        mock_network_client.download.side_effect = _download
        return written

    return _serve


@pytest.fixture
def corrupted_archive(tmp_path):
    """Create a corrupted archive for testing extraction failures."""
    archive_path = tmp_path / "corrupted.tar.gz"
    archive_path.write_bytes(b"not a valid archive")
    return archive_path


@pytest.fixture
def corrupted_deflate_zip(tmp_path):
    """A zip with a valid directory but garbage in its deflate stream."""
    archive_path = tmp_path / "jdk-11.0.2_windows-x64.zip"
    with zipfile.ZipFile(archive_path, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("jdk-11.0.2/bin/java.exe", bytes(range(256)) * 64)
        member = archive.getinfo("jdk-11.0.2/bin/java.exe")

    data = bytearray(archive_path.read_bytes())
    offset = member.header_offset
    name_len = int.from_bytes(data[offset + 26 : offset + 28], "little")
    extra_len = int.from_bytes(data[offset + 28 : offset + 30], "little")
    start = offset + 30 + name_len + extra_len
    length = min(16, member.compress_size)
    data[start : start + length] = b"\xff" * length
    archive_path.write_bytes(bytes(data))
    return archive_path
