"""Configuration for cargojni.

This package provides:
- YAML build description parsing and validation (cargojni.yaml)
- Layered property resolution (call site -> local.properties -> environment -> default)
- Cargo feature selection policies and profile flags
"""

from .features import (
    AllFeatures,
    DefaultAnd,
    FeatureSelection,
    NoDefaultBut,
    UnsetFeatures,
    profile_args,
    profile_dir_name,
)
from .parser import CONFIG_FILENAME, CargoConfig, load_config, parse_config
from .properties import PropertyResolver, read_properties

__all__ = [
    "CONFIG_FILENAME",
    "CargoConfig",
    "parse_config",
    "load_config",
    "PropertyResolver",
    "read_properties",
    "FeatureSelection",
    "UnsetFeatures",
    "AllFeatures",
    "DefaultAnd",
    "NoDefaultBut",
    "profile_args",
    "profile_dir_name",
]
