"""
Tests for NDK toolchain path resolution.
"""

from pathlib import Path, PurePath

import pytest

from cargojni.core.platform import HostPlatform
from cargojni.toolchain.layout import ToolchainLayoutResolver
from cargojni.toolchain.ndk import NdkInfo
from cargojni.toolchain.registry import default_registry


@pytest.fixture
def registry():
    return default_registry()


class TestCompilerNames:
    """Test compiler wrapper naming."""

    def test_android_cc(self, registry, linux_host):
        resolver = ToolchainLayoutResolver(linux_host)
        entry = registry.lookup("arm64")

        assert resolver.cc_name(entry, 21) == PurePath("bin", "aarch64-linux-android21-clang")
        assert resolver.cxx_name(entry, 21) == PurePath("bin", "aarch64-linux-android21-clang++")

    def test_android_arm_uses_compiler_triple(self, registry, linux_host):
        resolver = ToolchainLayoutResolver(linux_host)

        assert resolver.cc_name(registry.lookup("arm"), 19) == PurePath(
            "bin", "armv7a-linux-androideabi19-clang"
        )

    def test_windows_adds_cmd_suffix(self, registry, windows_host):
        resolver = ToolchainLayoutResolver(windows_host)
        entry = registry.lookup("x86")

        assert resolver.cc_name(entry, 24) == PurePath("bin", "i686-linux-android24-clang.cmd")
        assert resolver.cxx_name(entry, 24) == PurePath("bin", "i686-linux-android24-clang++.cmd")

    def test_desktop_layout(self, registry, linux_host):
        resolver = ToolchainLayoutResolver(linux_host)
        entry = registry.lookup("linux-x86-64")

        assert resolver.cc_name(entry, 21) == PurePath(
            "linux-x86-64-21", "bin", "x86_64-unknown-linux-gnu-clang"
        )


class TestArchiver:
    """Test archiver selection by NDK version."""

    @pytest.mark.parametrize("major", [23, 25, 27])
    def test_unified_llvm_ar(self, registry, linux_host, major):
        resolver = ToolchainLayoutResolver(linux_host)
        assert resolver.ar_name(registry.lookup("arm"), 21, major) == PurePath("bin", "llvm-ar")

    def test_binutils_ar_before_r23(self, registry, linux_host):
        resolver = ToolchainLayoutResolver(linux_host)

        assert resolver.ar_name(registry.lookup("arm"), 21, 22) == PurePath(
            "bin", "arm-linux-androideabi-ar"
        )

    def test_unknown_version_uses_binutils(self, registry, linux_host):
        resolver = ToolchainLayoutResolver(linux_host)

        assert resolver.ar_name(registry.lookup("x86_64"), 21, 0) == PurePath(
            "bin", "x86_64-linux-android-ar"
        )

    def test_desktop_binutils_ar(self, registry, linux_host):
        resolver = ToolchainLayoutResolver(linux_host)

        assert resolver.ar_name(registry.lookup("darwin-aarch64"), 21, 22) == PurePath(
            "darwin-aarch64-21", "bin", "aarch64-apple-darwin-ar"
        )


class TestResolve:
    @pytest.mark.parametrize(
        "host,tag",
        [
            (HostPlatform("linux", "x64"), "linux-x86_64"),
            (HostPlatform("macos", "arm64"), "darwin-x86_64"),
            (HostPlatform("windows", "x64"), "windows-x86_64"),
        ],
    )
    def test_toolchain_directory(self, host, tag):
        ndk = NdkInfo(Path("/ndk"), "27.0")
        resolver = ToolchainLayoutResolver(host)

        assert resolver.toolchain_directory(ndk) == Path(
            "/ndk", "toolchains", "llvm", "prebuilt", tag
        )

    def test_resolve(self, registry, linux_host):
        ndk = NdkInfo(Path("/ndk"), "27.3.13750724")
        base = Path("/ndk/toolchains/llvm/prebuilt/linux-x86_64")

        toolchain = ToolchainLayoutResolver(linux_host).resolve(
            registry.lookup("arm64"), 23, ndk
        )

        assert toolchain.cc == base / "bin" / "aarch64-linux-android23-clang"
        assert toolchain.cxx == base / "bin" / "aarch64-linux-android23-clang++"
        assert toolchain.ar == base / "bin" / "llvm-ar"
