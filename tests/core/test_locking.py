"""
Unit tests for the locking module.
"""

import pytest
from unittest.mock import patch

from filelock import Timeout

from cargojni.core.exceptions import LockTimeoutError
from cargojni.core.locking import LockManager


class TestLockManager:
    """Tests for LockManager class."""

    def test_init_creates_lock_dir(self, tmp_path):
        lock_dir = tmp_path / "locks"
        manager = LockManager(lock_dir)

        assert manager.lock_dir == lock_dir
        assert lock_dir.is_dir()

    def test_lock_path_is_hidden_and_sanitized(self, tmp_path):
        manager = LockManager(tmp_path)
        assert manager.lock_path("a/b:c") == tmp_path / ".a-b-c.lock"

    def test_acquire_and_release(self, tmp_path):
        manager = LockManager(tmp_path)

        with manager.directory_lock("linker-wrapper", timeout=5):
            assert manager.lock_path("linker-wrapper").exists()

        # Re-acquiring proves the lock was released
        with manager.directory_lock("linker-wrapper", timeout=1):
            pass

    def test_timeout_raises_lock_timeout_error(self, tmp_path):
        manager = LockManager(tmp_path)

        with patch(
            "cargojni.core.locking.FileLock.acquire",
            side_effect=Timeout(str(manager.lock_path("x"))),
        ):
            with pytest.raises(LockTimeoutError) as exc_info:
                with manager.directory_lock("x", timeout=0.1):
                    pass

        assert "Could not acquire lock" in str(exc_info.value)
