"""
Cross-compilation environment synthesis.

Cargo cannot take extra raw linker flags per target. Instead the target's
linker is redirected to the wrapper script, and the wrapper reads the real
compiler and the extra link arguments from the environment set up here.

For an Android target ``aarch64-linux-android`` the result contains::

    CARGO_NDK_MAJOR_VERSION             27
    CARGO_TARGET_AARCH64_LINUX_ANDROID_LINKER   <build>/linker-wrapper/linker-wrapper.sh
    CC_AARCH64_LINUX_ANDROID            .../bin/aarch64-linux-android23-clang
    CXX_AARCH64_LINUX_ANDROID           .../bin/aarch64-linux-android23-clang++
    AR_AARCH64_LINUX_ANDROID            .../bin/llvm-ar
    CLANG_PATH                          same as CC (optional)
    CARGOJNI_PYTHON_COMMAND             interpreter running the wrapper
    CARGOJNI_LINKER_WRAPPER_PY          <build>/linker-wrapper/linker-wrapper.py
    CARGOJNI_CC                         same as CC
    CARGOJNI_CC_LINK_ARG                -Wl,-z,max-page-size=16384,-soname,librust.so
"""

import logging
import re
from typing import Dict, Optional

from cargojni.build.linker_wrapper import LinkerWrapper
from cargojni.build.request import TargetBuildRequest
from cargojni.core.exceptions import MissingConfigurationError
from cargojni.toolchain.layout import ResolvedToolchain, ToolchainLayoutResolver
from cargojni.toolchain.registry import ToolchainType

logger = logging.getLogger(__name__)

# 16 KiB pages are required on recent Android devices
MAX_PAGE_SIZE = 16384

_PLAIN_LIBNAME = re.compile(r"^[A-Za-z0-9_.+-]+$")


class EnvironmentSynthesizer:
    """
    Build the environment for a target's cargo invocation.

    Args:
        layout: Resolves NDK compiler/archiver paths
        linker_wrapper: Installed wrapper location (shared by all targets)
    """

    def __init__(self, layout: ToolchainLayoutResolver, linker_wrapper: LinkerWrapper):
        self.layout = layout
        self.linker_wrapper = linker_wrapper

    def synthesize(
        self,
        request: TargetBuildRequest,
        toolchain: Optional[ResolvedToolchain] = None,
    ) -> Dict[str, str]:
        """
        Environment variables to add for the target.

        Caller overrides are inserted first; target-specific variables
        follow and win on key collisions (last write wins).

        Args:
            request: Target to build
            toolchain: Pre-resolved toolchain paths (resolved here if None)

        Returns:
            Ordered mapping of variables; only additions, not os.environ
        """
        env: Dict[str, str] = dict(request.environment)

        entry = request.entry
        if entry.type is ToolchainType.DESKTOP:
            return env
        elif entry.type is not ToolchainType.ANDROID_PREBUILT:
            raise ValueError(f"Unhandled toolchain type: {entry.type}")

        if request.ndk is None:
            raise MissingConfigurationError(
                "ndk", f"required to cross-compile {entry.platform}"
            )

        if toolchain is None:
            toolchain = self.layout.resolve(entry, request.api_level, request.ndk)

        target = entry.env_target
        cc = str(toolchain.cc)

        env["CARGO_NDK_MAJOR_VERSION"] = str(request.ndk.version_major)
        env[f"CARGO_TARGET_{target}_LINKER"] = str(self.linker_wrapper.script_path)

        # Read by the cc crate in build.rs scripts
        env[f"CC_{target}"] = cc
        env[f"CXX_{target}"] = str(toolchain.cxx)
        env[f"AR_{target}"] = str(toolchain.ar)

        if request.auto_configure_clang_sys:
            # bindgen and other clang-sys users must not pick up host headers
            env["CLANG_PATH"] = cc

        env["CARGOJNI_PYTHON_COMMAND"] = request.python_command
        env["CARGOJNI_LINKER_WRAPPER_PY"] = str(self.linker_wrapper.python_script_path)
        env["CARGOJNI_CC"] = cc
        env["CARGOJNI_CC_LINK_ARG"] = link_arg(request.libname, request.generate_build_id)

        logger.debug(f"[{entry.platform}] cross-compilation environment: {env}")
        return env


def link_arg(libname: str, generate_build_id: bool = False) -> str:
    """
    Extra arguments the linker wrapper passes to clang.

    The library name is inserted as-is. Names with shell or comma
    characters are not escaped; a warning is logged for them.

    Example:
        >>> link_arg("rust", generate_build_id=True)
        '-Wl,-z,max-page-size=16384,-soname,librust.so,--build-id'
    """
    if not _PLAIN_LIBNAME.match(libname):
        logger.warning(
            f"Library name {libname!r} contains characters that are passed "
            "unescaped to the linker's -soname flag"
        )
    arg = f"-Wl,-z,max-page-size={MAX_PAGE_SIZE},-soname,lib{libname}.so"
    if generate_build_id:
        arg += ",--build-id"
    return arg


__all__ = ["EnvironmentSynthesizer", "link_arg", "MAX_PAGE_SIZE"]
