"""Network client implementation for JdkFetcher."""

import subprocess
from pathlib import Path
from typing import Optional

from .common import DEFAULT_TIMEOUT, Headers, ProcessResult


class NetworkClient:
    """Concrete implementation of network operations using curl.

    Each instance carries its own default headers, so the catalog transport
    and the download transport can be configured independently.
    """

    PROTOCOL_VERSION: str = "1.0"

    def __init__(
        self, timeout: int = DEFAULT_TIMEOUT, headers: Optional[Headers] = None
    ) -> None:
        self.timeout = timeout
        self.headers: Headers = dict(headers) if headers else {}

    def _build_curl_cmd(self, base_cmd: list[str]) -> list[str]:
        """Build a curl command with common reliability options."""
        cmd = ["curl"] + base_cmd
        cmd.extend(
            [
                "--compressed",  # Request compressed response
                "--max-time",
                str(self.timeout),
            ]
        )
        return cmd

    def _header_args(self, headers: Optional[Headers]) -> list[str]:
        merged = {**self.headers, **(headers or {})}
        args: list[str] = []
        for key, value in merged.items():
            args.extend(["-H", f"{key}: {value}"])
        return args

    def get(self, url: str, headers: Optional[Headers] = None) -> ProcessResult:
        base_cmd = [
            "-L",  # Follow redirects
            "-s",  # Silent mode
            "-S",  # Show errors
            "-f",  # Fail on HTTP error
        ]
        base_cmd.extend(self._header_args(headers))
        base_cmd.append(url)
        cmd = self._build_curl_cmd(base_cmd)

        return subprocess.run(cmd, capture_output=True, text=True)

    def download(
        self, url: str, output_path: Path, headers: Optional[Headers] = None
    ) -> ProcessResult:
        base_cmd = [
            "-L",  # Follow redirects
            "-s",  # Silent mode
            "-S",  # Show errors
            "-f",  # Fail on HTTP error
            "-o",
            str(output_path),  # Output file
        ]
        base_cmd.extend(self._header_args(headers))
        base_cmd.append(url)
        cmd = self._build_curl_cmd(base_cmd)

        return subprocess.run(cmd, capture_output=True, text=True)
