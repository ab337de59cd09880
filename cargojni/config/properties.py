"""Layered property resolution.

Most settings can come from four places. In order of precedence:

1. the value written in ``cargojni.yaml`` (or passed on the command line)
2. the project-local ``local.properties`` file, under a camelCase key
   such as ``rust.cargoCommand``
3. the process environment, under a SNAKE_CASE key such as
   ``CARGOJNI_CARGO_COMMAND``
4. a built-in default

``PropertyResolver`` is a pure function over those inputs: the local file
and the environment are read once and passed in as plain mappings.

Example:
    >>> resolver = PropertyResolver({"rust.cargoCommand": "cross"}, {})
    >>> resolver.get("rust.cargoCommand", "CARGOJNI_CARGO_COMMAND", default="cargo")
    'cross'
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from cargojni.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOCAL_PROPERTIES = "local.properties"

_TRUE_VALUES = ("1", "true")
_FALSE_VALUES = ("0", "false")


def read_properties(path: Union[str, Path]) -> Dict[str, str]:
    """
    Read a Java-style ``.properties`` file.

    Supports ``key=value`` and ``key: value`` lines, ``#`` and ``!``
    comments, and blank lines. Line continuations and unicode escapes are
    not supported. A missing file yields an empty dict.

    Args:
        path: File to read

    Returns:
        Mapping of keys to stripped values
    """
    path = Path(path)
    if not path.is_file():
        logger.debug(f"Properties file not found (optional): {path}")
        return {}

    properties: Dict[str, str] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith(("#", "!")):
                continue

            separators = [i for i in (line.find("="), line.find(":")) if i != -1]
            if not separators:
                properties[line] = ""
                continue

            index = min(separators)
            key = line[:index].strip()
            value = line[index + 1 :].strip()
            properties[key] = value

    logger.debug(f"Loaded {len(properties)} properties from {path}")
    return properties


class PropertyResolver:
    """
    Resolve settings from explicit values, local properties and environment.

    Attributes:
        local: Contents of the project-local properties file
        environ: Environment variables
    """

    def __init__(
        self,
        local: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.local: Dict[str, str] = dict(local or {})
        self.environ: Dict[str, str] = dict(environ or {})

    @classmethod
    def load(
        cls, project_dir: Path, environ: Optional[Mapping[str, str]] = None
    ) -> "PropertyResolver":
        """
        Build a resolver from ``<project_dir>/local.properties``.

        Args:
            project_dir: Project root directory
            environ: Environment (default: os.environ)
        """
        if environ is None:
            environ = os.environ
        return cls(read_properties(Path(project_dir) / LOCAL_PROPERTIES), environ)

    def get(
        self,
        local_key: str,
        env_key: Optional[str] = None,
        explicit: Optional[str] = None,
        default: Optional[str] = None,
    ) -> Optional[str]:
        """
        Resolve a property.

        Args:
            local_key: camelCase key in local.properties
            env_key: Environment variable name (None: not read from environment)
            explicit: Value given at the call site, wins if not None
            default: Fallback when no layer provides a value

        Returns:
            The first value found, or default
        """
        if explicit is not None:
            return explicit
        if local_key in self.local:
            return self.local[local_key]
        if env_key is not None and env_key in self.environ:
            return self.environ[env_key]
        return default

    def get_flag(
        self,
        local_key: str,
        env_key: Optional[str] = None,
        explicit: Optional[bool] = None,
        default: bool = False,
    ) -> bool:
        """
        Resolve a boolean property.

        Accepted values are 1/0/true/false; an empty value counts as unset.

        Raises:
            ConfigurationError: If the value is anything else
        """
        if explicit is not None:
            return bool(explicit)

        value = self.get(local_key, env_key)
        if value is None or value == "":
            return default
        if value.lower() in _TRUE_VALUES:
            return True
        if value.lower() in _FALSE_VALUES:
            return False

        name = f'"{local_key}" / "{env_key}"' if env_key else f'"{local_key}"'
        raise ConfigurationError(
            f"Illegal value for property {name}: {value!r}. "
            "Must be 0/1/true/false if set"
        )


__all__ = ["LOCAL_PROPERTIES", "read_properties", "PropertyResolver"]
