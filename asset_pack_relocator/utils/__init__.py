"""
Utilities Module.

Modules:
- file_utils: moves, sidecar handling, directory checks
"""

from asset_pack_relocator.utils.file_utils import (
    sidecar_path,
    is_directory_empty,
    move_file,
    remove_file_if_present,
    normalize_path,
    ensure_directory,
)

__all__ = [
    'sidecar_path',
    'is_directory_empty',
    'move_file',
    'remove_file_if_present',
    'normalize_path',
    'ensure_directory',
]
