"""
Tests for host platform detection.
"""

import pytest
from unittest.mock import patch

from cargojni.core.platform import (
    HostPlatform,
    clear_platform_cache,
    detect_host_platform,
)


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_platform_cache()
    yield
    clear_platform_cache()


class TestHostPlatform:
    """Test HostPlatform properties."""

    def test_linux_host_tag(self):
        host = HostPlatform("linux", "x64")
        assert host.ndk_host_tag == "linux-x86_64"
        assert not host.is_windows
        assert not host.is_macos

    def test_macos_always_uses_x86_64_prebuilt(self):
        assert HostPlatform("macos", "arm64").ndk_host_tag == "darwin-x86_64"
        assert HostPlatform("macos", "x64").ndk_host_tag == "darwin-x86_64"

    def test_windows_host_tag_depends_on_arch(self):
        assert HostPlatform("windows", "x64").ndk_host_tag == "windows-x86_64"
        assert HostPlatform("windows", "x86").ndk_host_tag == "windows"

    def test_windows_suffixes(self):
        host = HostPlatform("windows", "x64")
        assert host.compiler_suffix == ".cmd"
        assert host.script_suffix == ".bat"

    def test_unix_suffixes(self):
        host = HostPlatform("macos", "arm64")
        assert host.compiler_suffix == ""
        assert host.script_suffix == ".sh"

    def test_platform_string(self):
        assert str(HostPlatform("linux", "arm64")) == "linux-arm64"


class TestDetectHostPlatform:
    """Test detection from the platform module."""

    @pytest.mark.parametrize(
        "system,machine,expected",
        [
            ("Linux", "x86_64", HostPlatform("linux", "x64")),
            ("Darwin", "arm64", HostPlatform("macos", "arm64")),
            ("Windows", "AMD64", HostPlatform("windows", "x64")),
            ("CYGWIN_NT-10.0", "x86_64", HostPlatform("windows", "x64")),
            ("FreeBSD", "aarch64", HostPlatform("linux", "arm64")),
            ("Linux", "i686", HostPlatform("linux", "x86")),
            ("Linux", "armv7l", HostPlatform("linux", "arm")),
        ],
    )
    def test_detection(self, system, machine, expected):
        with patch("platform.system", return_value=system), patch(
            "platform.machine", return_value=machine
        ):
            assert detect_host_platform() == expected

    def test_detection_is_cached(self):
        with patch("platform.system", return_value="Linux") as system, patch(
            "platform.machine", return_value="x86_64"
        ):
            first = detect_host_platform()
            second = detect_host_platform()

        assert first is second
        assert system.call_count == 1
