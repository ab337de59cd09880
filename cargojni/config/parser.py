"""YAML build description parser for cargojni.

This module parses and validates ``cargojni.yaml``::

    version: 1
    module: ../rust          # crate directory, relative to the project
    libname: rust            # produces librust.so / librust.dylib / rust.dll
    targets: [arm64, x86_64, linux-x86-64]
    api_level: 23            # or api_levels: {arm64: 23, ...}, or min_sdk: 21
    profile: release
    features:
      no_default_but: [serde]

Validation happens entirely before any build work: missing or conflicting
settings raise here, so no subprocess is started for a bad description.
"""

import logging
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Any, Dict, List, Mapping, Optional

import yaml

from cargojni.config.features import (
    AllFeatures,
    DEBUG_PROFILE,
    DefaultAnd,
    FeatureSelection,
    NoDefaultBut,
    UnsetFeatures,
)
from cargojni.config.properties import PropertyResolver
from cargojni.core.exceptions import (
    ConfigurationError,
    ConflictingConfigurationError,
    MissingConfigurationError,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "cargojni.yaml"
SUPPORTED_VERSION = 1


@dataclass
class CargoConfig:
    """Complete, validated build description.

    Property-backed settings (commands, channel, clang-sys flag, cargo
    target directory, target list overrides) are already resolved.
    """

    project_dir: Path
    module: str
    libname: str
    targets: List[str]
    api_levels: Dict[str, int]
    profile: str = DEBUG_PROFILE
    features: FeatureSelection = field(default_factory=UnsetFeatures)
    verbose: Optional[bool] = None
    cargo_target_dir: str = ""
    cargo_target_dir_explicit: bool = False
    target_includes: Optional[List[str]] = None
    extra_cargo_build_arguments: List[str] = field(default_factory=list)
    environment: Dict[str, str] = field(default_factory=dict)
    generate_build_id: bool = False
    auto_configure_clang_sys: bool = True
    rustup_channel: str = ""
    cargo_command: str = "cargo"
    rustc_command: str = "rustc"
    python_command: str = sys.executable
    ndk_path: Optional[str] = None
    ndk_version: Optional[str] = None
    build_dir: Path = Path("build")
    project: Optional[str] = None
    properties: PropertyResolver = field(default_factory=PropertyResolver, repr=False)


def parse_config(
    config_path: Path,
    project_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CargoConfig:
    """
    Parse a cargojni.yaml build description.

    Args:
        config_path: Path to cargojni.yaml
        project_dir: Project root (default: directory containing the file)
        environ: Environment for property lookups (default: os.environ)

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigurationError("Configuration file is empty")
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must contain a mapping")

    if project_dir is None:
        project_dir = config_path.parent
    project_dir = Path(project_dir).resolve()

    logger.debug(f"Loaded build description from {config_path}")
    return load_config(data, project_dir, PropertyResolver.load(project_dir, environ))


def load_config(
    data: Dict[str, Any],
    project_dir: Path,
    properties: Optional[PropertyResolver] = None,
) -> CargoConfig:
    """
    Validate an in-memory build description.

    Args:
        data: Parsed YAML mapping
        project_dir: Project root directory
        properties: Property resolver (default: empty, no environment)

    Returns:
        Validated configuration
    """
    if properties is None:
        properties = PropertyResolver()
    project_dir = Path(project_dir)

    version = data.get("version", SUPPORTED_VERSION)
    if version != SUPPORTED_VERSION:
        raise ConfigurationError(
            f"Unsupported version: {version} (expected {SUPPORTED_VERSION})"
        )

    module = _optional_str(data, "module")
    if not module:
        raise MissingConfigurationError("module")

    libname = _optional_str(data, "libname")
    if not libname:
        raise MissingConfigurationError("libname")

    project = _optional_str(data, "project") or project_dir.name
    targets = _resolve_targets(data, properties, project)
    api_levels = _resolve_api_levels(data, targets)

    profile = _optional_str(data, "profile") or DEBUG_PROFILE
    features = _parse_features(data.get("features"))

    verbose = data.get("verbose")
    if verbose is not None and not isinstance(verbose, bool):
        raise ConfigurationError("verbose must be true or false")

    target_dir_property = properties.get("rust.cargoTargetDir", "CARGO_TARGET_DIR")
    target_directory = _optional_str(data, "target_directory")
    cargo_target_dir = target_dir_property or target_directory or f"{module}/target"

    target_includes = data.get("target_includes")
    if target_includes is not None:
        target_includes = _include_patterns(target_includes)

    environment = data.get("environment") or {}
    if not isinstance(environment, dict):
        raise ConfigurationError("environment must be a mapping")

    ndk = data.get("ndk") or {}
    if not isinstance(ndk, dict):
        raise ConfigurationError("ndk must be a mapping with 'path' and 'version'")

    auto_configure_clang_sys = data.get("auto_configure_clang_sys")
    if auto_configure_clang_sys is not None and not isinstance(auto_configure_clang_sys, bool):
        raise ConfigurationError("auto_configure_clang_sys must be true or false")

    rustup_channel = properties.get(
        "rust.rustupChannel",
        "CARGOJNI_RUSTUP_CHANNEL",
        explicit=_optional_str(data, "rustup_channel"),
    )

    return CargoConfig(
        project_dir=project_dir,
        module=module,
        libname=libname,
        targets=targets,
        api_levels=api_levels,
        profile=profile,
        features=features,
        verbose=verbose,
        cargo_target_dir=cargo_target_dir,
        cargo_target_dir_explicit=bool(target_dir_property or target_directory),
        target_includes=target_includes,
        extra_cargo_build_arguments=_string_list(
            data.get("extra_cargo_build_arguments") or [],
            "extra_cargo_build_arguments",
        ),
        environment={str(k): str(v) for k, v in environment.items()},
        generate_build_id=_optional_bool(data, "generate_build_id", False),
        auto_configure_clang_sys=properties.get_flag(
            "rust.autoConfigureClangSys",
            "CARGOJNI_AUTO_CONFIGURE_CLANG_SYS",
            explicit=auto_configure_clang_sys,
            default=True,
        ),
        rustup_channel=rustup_channel or "",
        cargo_command=properties.get(
            "rust.cargoCommand",
            "CARGOJNI_CARGO_COMMAND",
            explicit=_optional_str(data, "cargo_command") or None,
            default="cargo",
        ),
        rustc_command=properties.get(
            "rust.rustcCommand",
            "CARGOJNI_RUSTC_COMMAND",
            explicit=_optional_str(data, "rustc_command") or None,
            default="rustc",
        ),
        python_command=properties.get(
            "rust.pythonCommand",
            "CARGOJNI_PYTHON_COMMAND",
            explicit=_optional_str(data, "python_command") or None,
            default=sys.executable or "python",
        ),
        ndk_path=_optional_str(ndk, "path"),
        ndk_version=_optional_str(ndk, "version"),
        build_dir=project_dir / (_optional_str(data, "build_dir") or "build"),
        project=project,
        properties=properties,
    )


def _resolve_targets(
    data: Dict[str, Any], properties: PropertyResolver, project: str
) -> List[str]:
    """Targets from local.properties (per-project first) or the description."""
    local_targets = properties.get(f"rust.targets.{project}") or properties.get(
        "rust.targets"
    )
    if local_targets is not None:
        logger.debug(f"Using targets from local properties: {local_targets}")
        raw: Any = local_targets
    else:
        raw = data.get("targets")

    if raw is None:
        raise MissingConfigurationError("targets")

    if isinstance(raw, str):
        targets = [t.strip() for t in raw.split(",") if t.strip()]
    else:
        targets = _string_list(raw, "targets")

    if not targets:
        raise MissingConfigurationError("targets", "at least one target is required")
    return targets


def _resolve_api_levels(data: Dict[str, Any], targets: List[str]) -> Dict[str, int]:
    """Ensure that an API level is specified for all targets."""
    api_level = data.get("api_level")
    api_levels = data.get("api_levels") or {}
    if not isinstance(api_levels, dict):
        raise ConfigurationError("api_levels must be a mapping of target to level")

    if api_levels:
        if api_level is not None:
            raise ConflictingConfigurationError("api_level", "api_levels")
        levels = {str(k): _api_level(v, f"api_levels.{k}") for k, v in api_levels.items()}
    else:
        default = api_level if api_level is not None else data.get("min_sdk")
        if default is None:
            raise MissingConfigurationError(
                "api_level", "set `api_level`, `api_levels` or `min_sdk`"
            )
        default = _api_level(default, "api_level")
        levels = {target: default for target in targets}

    missing = sorted(set(targets) - set(levels))
    if missing:
        raise MissingConfigurationError(
            "api_levels", f"missing entries for: {', '.join(missing)}"
        )
    return levels


def _parse_features(data: Any) -> FeatureSelection:
    if data is None:
        return UnsetFeatures()
    if not isinstance(data, dict):
        raise ConfigurationError(
            "features must be a mapping with one of: all, default_and, no_default_but"
        )

    unknown = set(data) - {"all", "default_and", "no_default_but"}
    if unknown:
        raise ConfigurationError(f"Unknown feature policy: {', '.join(sorted(unknown))}")

    policies = [key for key in ("all", "default_and", "no_default_but") if key in data]
    if len(policies) > 1:
        raise ConflictingConfigurationError(*(f"features.{p}" for p in policies))
    if not policies:
        return UnsetFeatures()

    policy = policies[0]
    if policy == "all":
        return AllFeatures() if data["all"] else UnsetFeatures()

    names = _string_list(data[policy] or [], f"features.{policy}")
    if policy == "default_and":
        return DefaultAnd(names)
    return NoDefaultBut(names)


def _include_patterns(value: Any) -> List[str]:
    """Glob patterns relative to cargo's output folder."""
    patterns = _string_list(value, "target_includes")
    for pattern in patterns:
        if PurePath(pattern).is_absolute() or pattern.startswith(("/", "\\")):
            raise ConfigurationError(
                f"target_includes must be relative patterns, got {pattern!r}"
            )
        if ".." in re.split(r"[\\/]", pattern):
            raise ConfigurationError(
                f"target_includes must not leave the output folder, got {pattern!r}"
            )
    return patterns


def _api_level(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigurationError(f"{name} must be an integer API level")
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer API level, got {value!r}")


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ConfigurationError(f"{key} must be a string")
    return str(value)


def _optional_bool(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false")
    return value


def _string_list(value: Any, name: str) -> List[str]:
    if not isinstance(value, list):
        raise ConfigurationError(f"{name} must be a list")
    return [str(item) for item in value]


__all__ = [
    "CONFIG_FILENAME",
    "CargoConfig",
    "parse_config",
    "load_config",
]
