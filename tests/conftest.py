"""
Pytest configuration and shared fixtures for cargojni tests.
"""

import pytest
import tempfile
from pathlib import Path
from typing import Generator

from cargojni.core.platform import HostPlatform


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require a real cargo/rustc",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create temporary directory for test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def linux_host() -> HostPlatform:
    return HostPlatform(os="linux", arch="x64")


@pytest.fixture
def windows_host() -> HostPlatform:
    return HostPlatform(os="windows", arch="x64")


@pytest.fixture
def fake_ndk(temp_dir: Path) -> Path:
    """Create an NDK r27 directory with only source.properties."""
    ndk = temp_dir / "ndk" / "27.3.13750724"
    ndk.mkdir(parents=True)
    (ndk / "source.properties").write_text(
        "Pkg.Desc = Android NDK\nPkg.Revision = 27.3.13750724\n"
    )
    return ndk


@pytest.fixture
def cargo_project(temp_dir: Path, fake_ndk: Path) -> Path:
    """Create a project with a crate in rust/ and a cargojni.yaml."""
    project = temp_dir / "project"
    (project / "rust" / "src").mkdir(parents=True)
    (project / "rust" / "Cargo.toml").write_text(
        '[package]\nname = "rust"\nversion = "0.1.0"\n\n'
        '[lib]\ncrate-type = ["cdylib"]\n'
    )
    (project / "rust" / "src" / "lib.rs").write_text("")

    config = f"""version: 1
module: rust
libname: rust
targets:
  - arm64
  - linux-x86-64
api_level: 21
ndk:
  path: {fake_ndk.as_posix()}
"""
    (project / "cargojni.yaml").write_text(config)
    return project
