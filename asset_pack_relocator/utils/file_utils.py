"""
File Utilities Module.

Provides reusable functions for the filesystem operations the relocation
engine performs:
- Moving files without overwriting
- Sidecar (asset database metadata) path handling
- Recursive emptiness checks before deleting directories
- Path normalization
"""

import os
import shutil
from pathlib import Path
from typing import Union
import structlog


logger = structlog.get_logger("file_utils")


def sidecar_path(path: Union[str, Path], suffix: str = ".meta") -> Path:
    """
    Get the sidecar metadata path the asset database keeps next to a file or folder.

    Example:
        >>> sidecar_path("Assets/pack1.androidpack/a.bundle")
        Path('Assets/pack1.androidpack/a.bundle.meta')
    """
    path = Path(path)
    return path.with_name(path.name + suffix)


def is_directory_empty(path: Union[str, Path]) -> bool:
    """
    Check whether a directory holds no files and no subdirectories at any depth.

    A directory that only contains empty subdirectories is NOT empty.

    Args:
        path: Directory to inspect

    Returns:
        True if the directory exists and contains nothing
    """
    path = Path(path)
    if not path.is_dir():
        return False
    return next(path.iterdir(), None) is None


def move_file(source: Union[str, Path], target: Union[str, Path]) -> Path:
    """
    Move a file, creating the target's parent directories.

    Unlike ``shutil.move`` on POSIX, an existing target is never replaced.

    Args:
        source: Existing file
        target: Destination path (not a directory)

    Returns:
        Path of the moved file

    Raises:
        FileExistsError: If the target already exists
        OSError: If the underlying move fails
    """
    source = Path(source)
    target = Path(target)

    if target.exists():
        raise FileExistsError(f"Target already exists: {target}")

    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.move(str(source), str(target))
    logger.debug("file_moved", source=str(source), target=str(target))
    return target


def remove_file_if_present(path: Union[str, Path]) -> bool:
    """
    Delete a file if it exists.

    Returns:
        True if a file was removed
    """
    path = Path(path)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


def normalize_path(path: Union[str, Path]) -> str:
    """
    Normalize a path for cross-platform compatibility.

    - Converts backslashes to forward slashes
    - Resolves . and .. components
    - Removes trailing slashes

    Example:
        >>> normalize_path("Assets\\\\StreamingAssets\\\\")
        'Assets/StreamingAssets'
    """
    normalized = os.path.normpath(str(path).replace('\\', '/'))
    return normalized.replace('\\', '/')


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        Path object for the directory
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path
