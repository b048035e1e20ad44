"""
Relocation package for Asset Pack Relocator.

Moves asset pack build output between layouts:
- Manifest loading (packaging metadata written upstream)
- Path resolution for default and packaged layouts
- Pointer file and bundle relocation
- Operation reporting
"""

from asset_pack_relocator.relocation.errors import (
    RelocationError,
    ManifestParseError,
    RelocationIOError,
)
from asset_pack_relocator.relocation.manifest import Manifest, ManifestEntry, load_manifest
from asset_pack_relocator.relocation.paths import PathResolver, RelocationPaths
from asset_pack_relocator.relocation.report import RelocationReport
from asset_pack_relocator.relocation.tracker import AssetTracker, FilesystemAssetTracker
from asset_pack_relocator.relocation.engine import RelocationEngine, RelocationResult

__all__ = [
    "RelocationError",
    "ManifestParseError",
    "RelocationIOError",
    "Manifest",
    "ManifestEntry",
    "load_manifest",
    "PathResolver",
    "RelocationPaths",
    "RelocationReport",
    "AssetTracker",
    "FilesystemAssetTracker",
    "RelocationEngine",
    "RelocationResult",
]
