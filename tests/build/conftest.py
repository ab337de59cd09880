"""
Fixtures for build tests.
"""

from pathlib import Path

import pytest

from cargojni.build.linker_wrapper import LinkerWrapper
from cargojni.build.request import TargetBuildRequest
from cargojni.toolchain.ndk import NdkInfo
from cargojni.toolchain.registry import default_registry


@pytest.fixture
def ndk() -> NdkInfo:
    return NdkInfo(Path("/ndk"), "27.3.13750724")


@pytest.fixture
def wrapper(temp_dir, linux_host) -> LinkerWrapper:
    return LinkerWrapper.for_build_dir(temp_dir / "build", linux_host)


@pytest.fixture
def make_request(temp_dir, ndk):
    """Factory for TargetBuildRequest with test defaults."""

    def _make(platform="arm64", **overrides):
        values = dict(
            entry=default_registry().lookup(platform),
            api_level=21,
            libname="rust",
            module="rust",
            project_dir=temp_dir,
            build_dir=temp_dir / "build",
            cargo_target_dir="rust/target",
            ndk=ndk,
            python_command="python3",
        )
        values.update(overrides)
        return TargetBuildRequest(**values)

    return _make
