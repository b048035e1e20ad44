"""
Relocation Engine for Asset Pack Relocator.

Moves asset pack build output between the two layouts a build can need:

PACKAGED (app bundle builds):
1. Pointer file: editor data directory -> streaming assets root
2. Each manifest entry: build output -> {pack}.androidpack directory,
   then registered with the asset tracker

DEFAULT (every other Android build):
1. Pointer file: streaming assets root -> editor data directory,
   removing the streaming assets root if nothing else lives there
2. Each manifest entry: {pack}.androidpack directory -> build output

Both directions skip anything already in place, so an interrupted run is
repaired by running it again. Nothing is rolled back on failure.
"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

import structlog

from asset_pack_relocator.config import BuildMode, Settings, get_settings
from asset_pack_relocator.relocation.errors import RelocationError, RelocationIOError
from asset_pack_relocator.relocation.manifest import ManifestEntry, load_manifest
from asset_pack_relocator.relocation.paths import PathResolver
from asset_pack_relocator.relocation.report import RelocationReport
from asset_pack_relocator.relocation.tracker import AssetTracker, FilesystemAssetTracker
from asset_pack_relocator.utils.file_utils import (
    ensure_directory,
    is_directory_empty,
    move_file,
    sidecar_path,
)


class RelocationResult:
    """
    Result container for a completed relocation run.

    Failures raise instead of returning, so ``success`` is always True; it is
    kept so the CLI output reads the same as other pipeline results.
    """

    def __init__(
        self,
        mode: BuildMode,
        moved_count: int = 0,
        skipped_count: int = 0,
        duration_seconds: float = 0.0,
        report: Optional[RelocationReport] = None
    ):
        self.success = True
        self.mode = mode
        self.moved_count = moved_count
        self.skipped_count = skipped_count
        self.duration_seconds = duration_seconds
        self.report = report
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        """Convert result to dictionary for logging/output."""
        return {
            "success": self.success,
            "mode": self.mode.value,
            "moved_count": self.moved_count,
            "skipped_count": self.skipped_count,
            "duration_seconds": self.duration_seconds,
            "summary": self.report.get_summary() if self.report else {},
            "timestamp": self.timestamp.isoformat()
        }


class RelocationEngine:
    """
    Relocates asset pack files for the active build mode.

    Runs once per build, synchronously, before the generic step that copies
    packaged data into the player's staging area.
    """

    def __init__(
        self,
        resolver: PathResolver,
        tracker: AssetTracker,
        dry_run: bool = False,
        sidecar_suffix: str = ".meta"
    ):
        self.resolver = resolver
        self.tracker = tracker
        self.dry_run = dry_run
        self.sidecar_suffix = sidecar_suffix
        self.logger = structlog.get_logger("relocation_engine")
        self.last_report: Optional[RelocationReport] = None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        tracker: Optional[AssetTracker] = None
    ) -> "RelocationEngine":
        """Build an engine wired to the on-disk project described by settings."""
        settings = settings or get_settings()
        paths = settings.relocation_paths()
        resolver = PathResolver(paths)

        if tracker is None:
            tracker = FilesystemAssetTracker(
                is_tracked=resolver.is_under_asset_database,
                sidecar_suffix=settings.sidecar_suffix,
                project_root=paths.project_root
            )

        return cls(
            resolver=resolver,
            tracker=tracker,
            dry_run=settings.dry_run,
            sidecar_suffix=settings.sidecar_suffix
        )

    def relocate(self, mode: BuildMode) -> RelocationResult:
        """
        Move pointer file and manifest entries into the layout for ``mode``.

        Args:
            mode: Layout to produce

        Returns:
            RelocationResult with move/skip counts and the operation report

        Raises:
            ManifestParseError: Packaging metadata could not be loaded
            RelocationIOError: A move or delete failed
        """
        mode = BuildMode(mode)
        start_time = datetime.now(timezone.utc)
        report = RelocationReport(mode.value, dry_run=self.dry_run)
        self.last_report = report

        self.logger.info("relocation_started", mode=mode.value, dry_run=self.dry_run)

        try:
            if mode == BuildMode.PACKAGED:
                self._move_pointer_to_runtime(report)
                self._move_entries_to_packs(report)
            else:
                self._move_pointer_to_editor(report)
                self._move_entries_to_build_output(report)
        except RelocationError as e:
            report.add_error(str(e), getattr(e, "path", None))
            self.logger.error("relocation_failed", mode=mode.value, error=str(e))
            raise

        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        summary = report.get_summary()

        self.logger.info(
            "relocation_complete",
            mode=mode.value,
            files_moved=summary["files_moved"],
            entries_skipped=summary["entries_skipped"],
            duration_seconds=duration
        )

        return RelocationResult(
            mode=mode,
            moved_count=summary["files_moved"],
            skipped_count=summary["entries_skipped"],
            duration_seconds=duration,
            report=report
        )

    # -------------------------------------------------------------------------
    # Pointer File
    # -------------------------------------------------------------------------

    def _move_pointer_to_runtime(self, report: RelocationReport):
        editor_path = self.resolver.pointer_editor_path()
        if not editor_path.is_file():
            self.logger.debug("pointer_not_in_editor_location", path=str(editor_path))
            return

        runtime_root = self.resolver.runtime_root()
        if not runtime_root.is_dir():
            if not self.dry_run:
                self._guard(ensure_directory, runtime_root)
            report.add_operation("create_dir", target_path=str(runtime_root))

        runtime_path = self.resolver.pointer_runtime_path()
        self._move(editor_path, runtime_path, report)
        self._delete_sidecar(editor_path, report)

        self.logger.info("pointer_moved", source=str(editor_path), target=str(runtime_path))

    def _move_pointer_to_editor(self, report: RelocationReport):
        runtime_path = self.resolver.pointer_runtime_path()
        if not runtime_path.is_file():
            self.logger.debug("pointer_not_in_runtime_location", path=str(runtime_path))
            return

        editor_path = self.resolver.pointer_editor_path()
        self._move(runtime_path, editor_path, report)
        self._delete_sidecar(runtime_path, report)

        self.logger.info("pointer_moved", source=str(runtime_path), target=str(editor_path))

        runtime_root = self.resolver.runtime_root()
        pending = {runtime_path, sidecar_path(runtime_path, self.sidecar_suffix)}
        if not self._is_empty_after_relocation(runtime_root, pending):
            self.logger.info("runtime_root_kept", path=str(runtime_root))
            return

        if not self.dry_run:
            self._guard(self.tracker.delete_tracked_or_raw, runtime_root)
        report.add_operation("delete_dir", target_path=str(runtime_root))
        self.logger.info("runtime_root_deleted", path=str(runtime_root))

    def _is_empty_after_relocation(self, directory: Path, pending: set) -> bool:
        """
        Whether ``directory`` is (or, in dry-run mode, would be) completely empty.

        ``pending`` holds the paths a dry run only pretended to move away.
        """
        if not directory.is_dir():
            return False
        if not self.dry_run:
            return is_directory_empty(directory)
        return all(child in pending for child in directory.rglob("*"))

    # -------------------------------------------------------------------------
    # Manifest Entries
    # -------------------------------------------------------------------------

    def _planned_entries(self, report: RelocationReport) -> Iterable[tuple]:
        """
        Load the manifest and resolve every entry before anything moves.

        An unsafe destination anywhere in the manifest aborts the phase
        without touching any entry.
        """
        metadata_path = self.resolver.metadata_path()
        if not metadata_path.is_file():
            self.logger.info("packaging_metadata_absent", path=str(metadata_path))
            return []

        manifest = load_manifest(metadata_path)
        report.set_total_entries(len(manifest))

        return [
            (entry, self.resolver.resolve_source(entry), self.resolver.resolve_destination(entry))
            for entry in manifest
        ]

    def _move_entries_to_packs(self, report: RelocationReport):
        for entry, source, destination in self._planned_entries(report):
            if not source.is_file():
                report.add_operation("skip", source_path=str(source), reason="source_missing")
                self.logger.debug("entry_skipped", source=str(source), reason="source_missing")
                continue

            self._move(source, destination, report, entry)

            if not self.dry_run:
                self._guard(self.tracker.notify_imported, destination, entry=entry)
            report.add_operation("import", target_path=str(destination))

    def _move_entries_to_build_output(self, report: RelocationReport):
        for entry, source, destination in self._planned_entries(report):
            if not destination.is_file():
                report.add_operation(
                    "skip", source_path=str(destination), reason="destination_missing"
                )
                self.logger.debug(
                    "entry_skipped", destination=str(destination), reason="destination_missing"
                )
                continue

            self._move(destination, source, report, entry)
            self._delete_sidecar(destination, report, entry)

    # -------------------------------------------------------------------------
    # Filesystem Operations
    # -------------------------------------------------------------------------

    def _move(
        self,
        source: Path,
        target: Path,
        report: RelocationReport,
        entry: Optional[ManifestEntry] = None
    ):
        if target.exists():
            raise RelocationIOError("Destination already exists", target, entry)

        if not target.parent.exists():
            report.add_operation("create_dir", target_path=str(target.parent))

        if not self.dry_run:
            try:
                move_file(source, target)
            except OSError as e:
                raise RelocationIOError(f"Move failed ({e})", source, entry) from e

        report.add_operation("move", source_path=str(source), target_path=str(target))

    def _delete_sidecar(
        self,
        path: Path,
        report: RelocationReport,
        entry: Optional[ManifestEntry] = None
    ):
        meta = sidecar_path(path, self.sidecar_suffix)
        if not meta.is_file():
            return

        if not self.dry_run:
            self._guard(meta.unlink, entry=entry, path=meta)
        report.add_operation("delete_sidecar", target_path=str(meta))

    def _guard(self, func, target=None, entry: Optional[ManifestEntry] = None, path=None):
        """Run a filesystem call, converting OSError into RelocationIOError."""
        try:
            if target is None:
                return func()
            return func(target)
        except OSError as e:
            raise RelocationIOError(
                f"{getattr(func, '__name__', 'operation')} failed ({e})",
                path or target,
                entry
            ) from e
