"""
Tests for FilesystemAssetTracker.
"""

from asset_pack_relocator.relocation import FilesystemAssetTracker


def test_notify_imported_writes_sidecar(temp_dir):
    """Importing a file writes a .meta sidecar with a guid."""
    asset = temp_dir / "Assets" / "pack1.androidpack" / "a.bundle"
    asset.parent.mkdir(parents=True)
    asset.write_text("bundle")
    tracker = FilesystemAssetTracker(is_tracked=lambda p: True, project_root=temp_dir)

    tracker.notify_imported(asset)

    meta = asset.with_name("a.bundle.meta")
    assert meta.exists()
    assert "guid: " in meta.read_text()


def test_notify_imported_keeps_existing_sidecar(temp_dir):
    asset = temp_dir / "a.bundle"
    asset.write_text("bundle")
    meta = temp_dir / "a.bundle.meta"
    meta.write_text("guid: keep")
    tracker = FilesystemAssetTracker(is_tracked=lambda p: True, project_root=temp_dir)

    tracker.notify_imported(asset)

    assert meta.read_text() == "guid: keep"


def test_delete_tracked_folder_removes_its_sidecar(temp_dir):
    folder = temp_dir / "Assets" / "StreamingAssets"
    folder.mkdir(parents=True)
    (folder / "leftover.txt").write_text("x")
    meta = temp_dir / "Assets" / "StreamingAssets.meta"
    meta.write_text("guid: 1")
    tracker = FilesystemAssetTracker(is_tracked=lambda p: True, project_root=temp_dir)

    tracker.delete_tracked_or_raw(folder)

    assert not folder.exists()
    assert not meta.exists()


def test_delete_untracked_folder_is_raw(temp_dir):
    folder = temp_dir / "Temp" / "Staging"
    folder.mkdir(parents=True)
    neighbour = temp_dir / "Temp" / "Staging.meta"
    neighbour.write_text("not ours")
    tracker = FilesystemAssetTracker(is_tracked=lambda p: False, project_root=temp_dir)

    tracker.delete_tracked_or_raw(folder)

    assert not folder.exists()
    assert neighbour.exists()


def test_custom_sidecar_suffix(temp_dir):
    asset = temp_dir / "a.bundle"
    asset.write_text("bundle")
    tracker = FilesystemAssetTracker(
        is_tracked=lambda p: True,
        sidecar_suffix=".import",
        project_root=temp_dir
    )

    tracker.notify_imported(asset)

    assert (temp_dir / "a.bundle.import").exists()
