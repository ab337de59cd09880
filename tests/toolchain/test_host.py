"""
Tests for host triple detection.
"""

import logging
from unittest.mock import Mock, patch

from cargojni.toolchain.host import HostTripleDetector, parse_host_triple

RUSTC_VV = """rustc 1.80.0 (051478957 2024-07-21)
binary: rustc
commit-hash: 051478957371ee0084a7c0913941d2a8c4757bb9
host: x86_64-unknown-linux-gnu
release: 1.80.0
LLVM version: 18.1.7
"""


class TestParseHostTriple:
    def test_parse(self):
        assert parse_host_triple(RUSTC_VV) == "x86_64-unknown-linux-gnu"

    def test_no_host_line(self):
        assert parse_host_triple("rustc 1.80.0\nrelease: 1.80.0\n") is None

    def test_empty_host_value(self):
        assert parse_host_triple("host: \n") is None


class TestHostTripleDetector:
    """Test rustc invocation and its failure modes."""

    def test_detect(self, caplog):
        completed = Mock(returncode=0, stdout=RUSTC_VV, stderr="")

        with patch("subprocess.run", return_value=completed) as mock_run:
            with caplog.at_level(logging.INFO):
                triple = HostTripleDetector("/opt/rustc").detect()

        assert triple == "x86_64-unknown-linux-gnu"
        assert mock_run.call_args[0][0] == ["/opt/rustc", "--version", "--verbose"]
        assert "Default rust target triple: x86_64-unknown-linux-gnu" in caplog.text

    def test_rustc_missing(self, caplog):
        with patch("subprocess.run", side_effect=FileNotFoundError("rustc")):
            with caplog.at_level(logging.WARNING):
                assert HostTripleDetector().detect() is None

        assert "Failed to get default target triple" in caplog.text

    def test_non_zero_exit(self, caplog):
        completed = Mock(returncode=1, stdout="", stderr="error: toolchain not installed")

        with patch("subprocess.run", return_value=completed):
            with caplog.at_level(logging.WARNING):
                assert HostTripleDetector().detect() is None

        assert "exit code: 1" in caplog.text

    def test_unparseable_output(self, caplog):
        completed = Mock(returncode=0, stdout="rustc 1.80.0\n", stderr="")

        with patch("subprocess.run", return_value=completed):
            with caplog.at_level(logging.WARNING):
                assert HostTripleDetector().detect() is None

        assert "Failed to parse" in caplog.text

    def test_permission_error(self):
        with patch("subprocess.run", side_effect=PermissionError("denied")):
            assert HostTripleDetector().detect() is None

    def test_uses_subprocess_run_without_check(self):
        completed = Mock(returncode=0, stdout=RUSTC_VV, stderr="")

        with patch("subprocess.run", return_value=completed) as mock_run:
            HostTripleDetector().detect()

        assert mock_run.call_args[1]["check"] is False
        assert mock_run.call_args[1]["capture_output"] is True

