"""
NDK toolchain layout.

Computes where the C/C++ compilers and archiver for a target live inside an
NDK. Paths are only computed here; a missing binary surfaces later, when
cargo (or a build script) fails to run it.

Layout rules:
    Android prebuilt:  bin/<compiler_triple><api>-clang[.cmd]
    Desktop:           <platform>-<api>/bin/<compiler_triple>-clang[.cmd]
    Archiver, NDK>=23: bin/llvm-ar
    Archiver, older:   bin/<binutils_triple>-ar (Android) or
                       <platform>-<api>/bin/<binutils_triple>-ar (Desktop)
"""

from dataclasses import dataclass
from pathlib import Path, PurePath

from cargojni.core.platform import HostPlatform
from cargojni.toolchain.ndk import NdkInfo
from cargojni.toolchain.registry import PlatformEntry, ToolchainType

UNIFIED_AR_NDK_MAJOR = 23


@dataclass(frozen=True)
class ResolvedToolchain:
    """Concrete compiler and archiver paths for one target."""

    cc: Path
    cxx: Path
    ar: Path


class ToolchainLayoutResolver:
    """
    Resolve toolchain binary paths for a host.

    Args:
        host: Build host, decides the prebuilt directory and '.cmd' suffixes
    """

    def __init__(self, host: HostPlatform):
        self.host = host

    def toolchain_directory(self, ndk: NdkInfo) -> Path:
        return Path(ndk.path) / "toolchains" / "llvm" / "prebuilt" / self.host.ndk_host_tag

    def cc_name(self, entry: PlatformEntry, api_level: int) -> PurePath:
        return self._compiler(entry, api_level, "clang")

    def cxx_name(self, entry: PlatformEntry, api_level: int) -> PurePath:
        return self._compiler(entry, api_level, "clang++")

    def ar_name(
        self, entry: PlatformEntry, api_level: int, ndk_version_major: int
    ) -> PurePath:
        if ndk_version_major >= UNIFIED_AR_NDK_MAJOR:
            return PurePath("bin", "llvm-ar")
        if entry.type is ToolchainType.ANDROID_PREBUILT:
            return PurePath("bin", f"{entry.binutils_triple}-ar")
        elif entry.type is ToolchainType.DESKTOP:
            return PurePath(f"{entry.platform}-{api_level}", "bin", f"{entry.binutils_triple}-ar")
        raise ValueError(f"Unhandled toolchain type: {entry.type}")

    def resolve(
        self, entry: PlatformEntry, api_level: int, ndk: NdkInfo
    ) -> ResolvedToolchain:
        """
        Resolve cc, cxx and ar for a target.

        Args:
            entry: Platform to build
            api_level: Minimum Android API level for the target
            ndk: NDK installation

        Returns:
            ResolvedToolchain with absolute-or-NDK-relative paths
        """
        base = self.toolchain_directory(ndk)
        return ResolvedToolchain(
            cc=base / self.cc_name(entry, api_level),
            cxx=base / self.cxx_name(entry, api_level),
            ar=base / self.ar_name(entry, api_level, ndk.version_major),
        )

    def _compiler(self, entry: PlatformEntry, api_level: int, tool: str) -> PurePath:
        suffix = self.host.compiler_suffix
        if entry.type is ToolchainType.ANDROID_PREBUILT:
            return PurePath("bin", f"{entry.compiler_triple}{api_level}-{tool}{suffix}")
        elif entry.type is ToolchainType.DESKTOP:
            return PurePath(
                f"{entry.platform}-{api_level}", "bin", f"{entry.compiler_triple}-{tool}{suffix}"
            )
        raise ValueError(f"Unhandled toolchain type: {entry.type}")


__all__ = ["ResolvedToolchain", "ToolchainLayoutResolver", "UNIFIED_AR_NDK_MAJOR"]
