"""
Unit tests for NetworkClient in jdkfetcher.network
"""

from pathlib import Path

import pytest

from jdkfetcher.network import NetworkClient


@pytest.fixture
def mock_subprocess_success(mocker, make_result):
    """Mock subprocess.run returning a successful curl result."""
    return mocker.patch("subprocess.run", return_value=make_result(stdout="[]"))


class TestNetworkClient:
    """Tests for NetworkClient class."""

    def test_init(self):
        """Test NetworkClient initialization."""
        client = NetworkClient(timeout=60)
        assert client.timeout == 60
        assert client.headers == {}

    def test_get_method(self, mock_subprocess_success):
        """Test GET method."""
        client = NetworkClient(timeout=30)
        result = client.get("https://api.example.com/releases")

        assert result.stdout == "[]"
        args, kwargs = mock_subprocess_success.call_args
        cmd = args[0]
        assert cmd[0] == "curl"
        assert cmd[-3:] == ["--compressed", "--max-time", "30"]
        assert "-f" in cmd
        assert "https://api.example.com/releases" in cmd
        assert kwargs == {"capture_output": True, "text": True}

    def test_get_method_with_headers(self, mock_subprocess_success):
        """Test GET method with headers."""
        client = NetworkClient(timeout=30)
        client.get("https://example.com", headers={"Accept": "application/json"})

        cmd = mock_subprocess_success.call_args[0][0]
        assert "-H" in cmd
        assert "Accept: application/json" in cmd

    def test_instance_headers_merge_with_call_headers(self, mock_subprocess_success):
        """Per-call headers override the client's defaults."""
        client = NetworkClient(headers={"User-Agent": "a", "X-Trace": "1"})
        client.get("https://example.com", headers={"User-Agent": "b"})

        cmd = mock_subprocess_success.call_args[0][0]
        assert "User-Agent: b" in cmd
        assert "User-Agent: a" not in cmd
        assert "X-Trace: 1" in cmd

    def test_clients_do_not_share_headers(self, mock_subprocess_success):
        catalog = NetworkClient(headers={"Accept": "application/json"})
        download = NetworkClient()

        download.get("https://example.com")

        cmd = mock_subprocess_success.call_args[0][0]
        assert "-H" not in cmd
        assert catalog.headers == {"Accept": "application/json"}

    def test_download_method(self, mock_subprocess_success):
        """Test download method."""
        client = NetworkClient(timeout=45)
        output_path = Path("/tmp/jdk.tar.gz")
        client.download("https://example.com/jdk.tar.gz", output_path)

        cmd = mock_subprocess_success.call_args[0][0]
        assert "-o" in cmd
        assert cmd[cmd.index("-o") + 1] == str(output_path)
        assert "-L" in cmd
        assert "45" in cmd

    def test_failed_command_returns_result(self, mocker, make_result):
        """Callers inspect returncode rather than catching exceptions."""
        mocker.patch(
            "subprocess.run",
            return_value=make_result(returncode=22, stderr="error: 404"),
        )
        client = NetworkClient()

        result = client.get("https://example.com/missing")

        assert result.returncode == 22
        assert "404" in result.stderr
