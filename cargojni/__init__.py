"""
cargojni - build Rust libraries for desktop hosts and Android ABIs.

Usage:
    from pathlib import Path
    from cargojni import BuildOrchestrator, parse_config

    config = parse_config(Path("cargojni.yaml"))
    report = BuildOrchestrator(config).build_all()
"""

try:
    from importlib.metadata import version

    __version__ = version("cargojni")
except Exception:
    __version__ = "0.1.0"

from cargojni.core.exceptions import CargoJniError
from cargojni.config.parser import CargoConfig, parse_config
from cargojni.toolchain.registry import TargetRegistry, default_registry
from cargojni.build.orchestrator import BuildOrchestrator, BuildReport

__all__ = [
    "__version__",
    "CargoJniError",
    "CargoConfig",
    "parse_config",
    "TargetRegistry",
    "default_registry",
    "BuildOrchestrator",
    "BuildReport",
]
