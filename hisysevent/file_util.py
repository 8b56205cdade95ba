"""Small file system helpers."""

from __future__ import annotations

import os
import stat

_DELIMITER = "/"


def is_file_exists(path: str) -> bool:
    """Return whether ``path`` exists (symbolic links are followed)."""
    return os.path.exists(path)


def is_file(path: str) -> bool:
    """Return whether ``path`` itself is a regular file."""
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError:
        return False


def is_directory(path: str) -> bool:
    """Return whether ``path`` itself is a directory."""
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except OSError:
        return False


def remove_file(path: str) -> None:
    """Remove ``path`` if it exists; raise ``OSError`` if that fails."""
    if is_file_exists(path):
        os.remove(path)


def remove_directory(path: str) -> None:
    """Remove the empty directory ``path`` if it exists; raise ``OSError`` if that fails."""
    if is_file_exists(path):
        os.rmdir(path)


def force_create_directory(path: str) -> None:
    """Create ``path`` and every missing parent, each with owner-only access."""
    prefixes = [path[:i] for i, char in enumerate(path) if char == _DELIMITER and i >= 1]
    prefixes.append(path)
    for sub_path in prefixes:
        if not is_file_exists(sub_path):
            os.mkdir(sub_path, 0o700)
    if not is_file_exists(path):
        raise FileNotFoundError(path)


def file_path_by_dir(directory: str, file_name: str) -> str:
    """Join ``directory`` and ``file_name`` with a single delimiter."""
    if not directory:
        return file_name
    if not directory.endswith(_DELIMITER):
        directory += _DELIMITER
    return directory + file_name


def is_legal_path(path: str) -> bool:
    """Return False for paths holding relative components such as ``./``."""
    return "./" not in path and "../" not in path