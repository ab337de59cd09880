"""
Toolchain knowledge for cargojni.

- registry: supported platforms and their target triples
- ndk: NDK installation and version discovery
- host: host triple detection via rustc
- layout: NDK compiler/archiver path resolution
"""

from cargojni.toolchain.registry import (
    PlatformEntry,
    TargetRegistry,
    ToolchainType,
    default_registry,
)
from cargojni.toolchain.ndk import NdkInfo, locate_ndk
from cargojni.toolchain.host import HostTripleDetector
from cargojni.toolchain.layout import ResolvedToolchain, ToolchainLayoutResolver

__all__ = [
    "PlatformEntry",
    "TargetRegistry",
    "ToolchainType",
    "default_registry",
    "NdkInfo",
    "locate_ndk",
    "HostTripleDetector",
    "ResolvedToolchain",
    "ToolchainLayoutResolver",
]
