"""
Linker wrapper installation.

The wrapper scripts ship inside the package (``cargojni/resources``) and are
copied once into ``<build_dir>/linker-wrapper/`` before any Android target is
built. Every target's ``CARGO_TARGET_<TRIPLE>_LINKER`` points at that single
stable location.
"""

import logging
from importlib import resources
from pathlib import Path
from typing import List, Optional

from cargojni.core.exceptions import LinkerWrapperError
from cargojni.core.filesystem import atomic_write, ensure_directory, make_executable
from cargojni.core.locking import LockManager
from cargojni.core.platform import HostPlatform

logger = logging.getLogger(__name__)

WRAPPER_DIRNAME = "linker-wrapper"
WRAPPER_BASENAME = "linker-wrapper"
WRAPPER_FILES = ("linker-wrapper.sh", "linker-wrapper.bat", "linker-wrapper.py")


class LinkerWrapper:
    """
    Location and installation of the linker wrapper scripts.

    Attributes:
        directory: Directory the scripts are installed into
        host: Build host, selects .sh or .bat
    """

    def __init__(self, directory: Path, host: HostPlatform):
        self.directory = Path(directory).absolute()
        self.host = host

    @classmethod
    def for_build_dir(cls, build_dir: Path, host: HostPlatform) -> "LinkerWrapper":
        return cls(Path(build_dir) / WRAPPER_DIRNAME, host)

    @property
    def script_path(self) -> Path:
        """Script cargo runs as the linker."""
        return self.directory / f"{WRAPPER_BASENAME}{self.host.script_suffix}"

    @property
    def python_script_path(self) -> Path:
        """Python script the shell/batch wrapper delegates to."""
        return self.directory / f"{WRAPPER_BASENAME}.py"

    def install(self, lock_manager: Optional[LockManager] = None) -> List[Path]:
        """
        Copy the wrapper scripts into place.

        Files whose content is already up to date are left alone, so this is
        cheap to call on every build. Concurrent installs into the same
        directory are serialized with a file lock.

        Returns:
            Paths of the installed scripts

        Raises:
            LinkerWrapperError: If a script cannot be read or written
        """
        ensure_directory(self.directory)
        if lock_manager is None:
            lock_manager = LockManager(self.directory)

        installed = []
        with lock_manager.directory_lock(WRAPPER_DIRNAME):
            for name in WRAPPER_FILES:
                installed.append(self._install_file(name))

        logger.debug(f"Linker wrapper ready in {self.directory}")
        return installed

    def _install_file(self, name: str) -> Path:
        destination = self.directory / name
        try:
            content = resources.files("cargojni.resources").joinpath(name).read_bytes()
        except (OSError, ModuleNotFoundError) as e:
            raise LinkerWrapperError(f"Packaged linker wrapper {name} is missing: {e}") from e

        try:
            if not destination.is_file() or destination.read_bytes() != content:
                atomic_write(destination, content)
                logger.debug(f"Installed {destination}")
            make_executable(destination)
        except OSError as e:
            raise LinkerWrapperError(f"Failed to install {destination}: {e}") from e

        return destination


__all__ = ["LinkerWrapper", "WRAPPER_DIRNAME", "WRAPPER_FILES"]
