"""
File locking for shared build directories.

Several projects (or several cargojni processes) can share one root build
directory. The linker wrapper scripts are written there once, so their
installation is serialized with a cross-process file lock.

Usage:
    from cargojni.core.locking import LockManager

    lock_manager = LockManager(build_dir / "linker-wrapper")
    with lock_manager.directory_lock("linker-wrapper", timeout=30):
        install_scripts()
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

from .exceptions import LockTimeoutError

logger = logging.getLogger(__name__)


class LockManager:
    """
    Manages lock files stored in a single directory.

    Uses file-based locking with the `filelock` library for cross-platform
    compatibility and automatic cleanup on process death.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Path):
        self.lock_dir = Path(lock_dir)
        self.lock_dir.mkdir(parents=True, exist_ok=True)

    def lock_path(self, name: str) -> Path:
        safe_name = name.replace("/", "-").replace("\\", "-").replace(":", "-")
        return self.lock_dir / f".{safe_name}.lock"

    @contextmanager
    def directory_lock(self, name: str, timeout: int = 30):
        """
        Acquire a named lock.

        Args:
            name: Lock name (used for the lock file name)
            timeout: Maximum wait time in seconds (default: 30)

        Yields:
            None

        Raises:
            LockTimeoutError: If lock can't be acquired within timeout
        """
        lock_path = self.lock_path(name)
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired lock: {lock_path}")
                yield
                logger.debug(f"Released lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire lock {lock_path} after {timeout}s. "
                "Another cargojni process may be running."
            )
            raise LockTimeoutError(
                f"Could not acquire lock {lock_path} after {timeout}s. "
                "Another cargojni process may be running."
            ) from e


__all__ = ["LockManager"]
