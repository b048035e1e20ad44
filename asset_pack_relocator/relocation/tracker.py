"""
Asset tracker collaborators.

The host editor keeps an asset database that must be told about files the
relocation engine creates, and that owns the deletion of folders it tracks.
The engine only sees the AssetTracker protocol; FilesystemAssetTracker is
the implementation used when no host editor is attached.
"""

import shutil
import uuid
from pathlib import Path
from typing import Callable, Protocol

import structlog

from asset_pack_relocator.utils.file_utils import (
    normalize_path,
    remove_file_if_present,
    sidecar_path,
)


class AssetTracker(Protocol):
    """Host asset-database capabilities used during relocation."""

    def notify_imported(self, path: Path) -> None:
        """Register a file that was just moved into the packaged layout."""
        ...

    def delete_tracked_or_raw(self, path: Path) -> None:
        """Delete a directory through the asset database when it tracks it."""
        ...


class FilesystemAssetTracker:
    """
    Emulates the asset database directly on disk.

    Importing a file writes a ``.meta`` sidecar next to it (if missing);
    deleting a tracked folder also removes the folder's own sidecar.
    """

    def __init__(
        self,
        is_tracked: Callable[[Path], bool],
        sidecar_suffix: str = ".meta",
        project_root: Path = Path(".")
    ):
        self.logger = structlog.get_logger("asset_tracker")
        self.is_tracked = is_tracked
        self.sidecar_suffix = sidecar_suffix
        self.project_root = Path(project_root)

    def _asset_path(self, path: Path) -> str:
        try:
            return normalize_path(Path(path).relative_to(self.project_root))
        except ValueError:
            return normalize_path(path)

    def notify_imported(self, path: Path) -> None:
        meta = sidecar_path(path, self.sidecar_suffix)
        if not meta.exists():
            meta.write_text(
                f"fileFormatVersion: 2\nguid: {uuid.uuid4().hex}\n",
                encoding="utf-8"
            )
        self.logger.info("asset_imported", asset=self._asset_path(path))

    def delete_tracked_or_raw(self, path: Path) -> None:
        path = Path(path)
        tracked = self.is_tracked(path)

        shutil.rmtree(path)
        if tracked:
            remove_file_if_present(sidecar_path(path, self.sidecar_suffix))

        self.logger.info(
            "directory_deleted",
            asset=self._asset_path(path),
            tracked=tracked
        )
