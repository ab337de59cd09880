"""
Filesystem helpers for cargojni.

Artifacts are staged with a temp-file-plus-rename copy so a downstream
consumer polling the output folder never sees a partially written library.
"""

import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import Iterable, List, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists (idempotent).

    Args:
        path: Directory path

    Returns:
        The directory as a Path
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_copy(source: Union[str, Path], destination: Union[str, Path]) -> Path:
    """
    Copy a file atomically using temp file + rename.

    The temp file is created next to the destination so the final rename
    never crosses filesystems. If the copy fails, any existing destination
    file is left untouched.

    Args:
        source: File to copy
        destination: Destination file path

    Returns:
        The destination path

    Example:
        >>> atomic_copy('target/release/libfoo.so', 'build/rustJniLibs/android/arm64-v8a/libfoo.so')
    """
    source = Path(source)
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
    )
    os.close(temp_fd)
    temp_path = Path(temp_path_str)

    try:
        shutil.copy2(source, temp_path)
        temp_path.replace(destination)
    except Exception:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise

    return destination


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    Args:
        file_path: Path to write to
        content: Content to write (string or bytes)
        encoding: Text encoding (used only for string content)
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding, newline="") as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def make_executable(path: Union[str, Path]) -> None:
    """Set 0755 permissions on a file (no-op where unsupported)."""
    path = Path(path)
    path.chmod(
        stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
    )


def glob_files(directory: Path, patterns: Iterable[str]) -> List[Path]:
    """
    Collect regular files under directory matching any of the glob patterns.

    Patterns are relative to directory and follow pathlib glob rules, so
    ``libfoo.so`` only matches at the top level while ``**/*.so`` recurses.
    Results are de-duplicated and sorted.
    """
    found = set()
    for pattern in patterns:
        for match in directory.glob(pattern):
            if match.is_file():
                found.add(match)
    return sorted(found)


__all__ = [
    "ensure_directory",
    "atomic_copy",
    "atomic_write",
    "make_executable",
    "glob_files",
]
