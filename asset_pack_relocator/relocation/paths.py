"""
Path resolution for the two relocation layouts.

Everything here is pure: no filesystem access, so the engine can be
driven against any temporary directory in tests.
"""

import posixpath
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Callable, Optional

from asset_pack_relocator.relocation.errors import ManifestParseError
from asset_pack_relocator.relocation.manifest import ManifestEntry


@dataclass(frozen=True)
class RelocationPaths:
    """
    Host layout, relative to ``project_root`` unless absolute.

    ``pack_root_template`` must contain a ``{pack_name}`` placeholder.
    """
    project_root: Path
    editor_pointer_path: Path
    runtime_pointer_path: Path
    runtime_root: Path
    metadata_path: Path
    pack_root_template: str = "Assets/{pack_name}.androidpack"
    asset_root: Path = field(default_factory=lambda: Path("Assets"))

    def absolute(self, path) -> Path:
        """Anchor a configured path at the project root."""
        path = Path(path)
        if path.is_absolute():
            return path
        return self.project_root / path


class PathResolver:
    """Maps manifest entries and auxiliary files to concrete paths."""

    def __init__(
        self,
        paths: RelocationPaths,
        is_under_asset_database: Optional[Callable[[Path], bool]] = None
    ):
        self.paths = paths
        self._is_under_asset_database = is_under_asset_database or self._default_asset_predicate

    # -------------------------------------------------------------------------
    # Auxiliary Files
    # -------------------------------------------------------------------------

    def pointer_editor_path(self) -> Path:
        return self.paths.absolute(self.paths.editor_pointer_path)

    def pointer_runtime_path(self) -> Path:
        return self.paths.absolute(self.paths.runtime_pointer_path)

    def runtime_root(self) -> Path:
        return self.paths.absolute(self.paths.runtime_root)

    def metadata_path(self) -> Path:
        return self.paths.absolute(self.paths.metadata_path)

    # -------------------------------------------------------------------------
    # Manifest Entries
    # -------------------------------------------------------------------------

    def resolve_source(self, entry: ManifestEntry) -> Path:
        """Build-output location of an entry."""
        return self.paths.absolute(entry.source_build_path)

    def resolve_destination(self, entry: ManifestEntry) -> Path:
        """
        Packaged location of an entry.

        The first segment of the destination subpath names the pack; it is
        expanded through ``pack_root_template`` and the rest is joined below it.
        ``pack1/a.bundle`` becomes ``Assets/pack1.androidpack/a.bundle``.

        Raises:
            ManifestParseError: If the subpath is empty, absolute, or escapes
                its pack directory
        """
        pack_name, remainder = self._split_sub_path(entry.destination_sub_path)

        pack_dir = self._pack_dir_name(pack_name)
        pack_root = self.paths.absolute(pack_dir)
        return pack_root.joinpath(*remainder.parts)

    def _split_sub_path(self, sub_path: str) -> tuple[str, PurePosixPath]:
        raw = sub_path.replace("\\", "/")
        if not raw or raw.startswith("/") or (len(raw) > 1 and raw[1] == ":"):
            raise ManifestParseError(f"Destination must be a relative path: {sub_path!r}")

        if ".." in PurePosixPath(raw).parts:
            raise ManifestParseError(f"Destination escapes the pack root: {sub_path!r}")

        parts = PurePosixPath(posixpath.normpath(raw)).parts
        if len(parts) < 2:
            raise ManifestParseError(
                f"Destination must name a pack and a file: {sub_path!r}"
            )
        return parts[0], PurePosixPath(*parts[1:])

    def _pack_dir_name(self, pack_name: str) -> str:
        template = self.paths.pack_root_template
        # Upstream sometimes writes the pack directory already suffixed
        suffix = template.rsplit("{pack_name}", 1)[-1]
        if suffix and pack_name.endswith(suffix):
            pack_name = pack_name[: -len(suffix)]
        return template.format(pack_name=pack_name)

    # -------------------------------------------------------------------------
    # Asset Database
    # -------------------------------------------------------------------------

    def is_under_asset_database(self, path: Path) -> bool:
        """Whether deleting ``path`` must go through the asset tracker."""
        return self._is_under_asset_database(Path(path))

    def _default_asset_predicate(self, path: Path) -> bool:
        asset_root = Path(posixpath.normpath(str(self.paths.absolute(self.paths.asset_root))))
        candidate = Path(posixpath.normpath(str(path)))
        return candidate != asset_root and asset_root in candidate.parents
