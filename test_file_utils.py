"""
Tests for file utilities.
"""

from pathlib import Path

import pytest

from asset_pack_relocator.utils import (
    ensure_directory,
    is_directory_empty,
    move_file,
    normalize_path,
    remove_file_if_present,
    sidecar_path,
)


def test_sidecar_path():
    assert sidecar_path("Assets/pack1.androidpack/a.bundle") == \
        Path("Assets/pack1.androidpack/a.bundle.meta")
    assert sidecar_path(Path("Assets/StreamingAssets"), ".import") == \
        Path("Assets/StreamingAssets.import")


def test_is_directory_empty(temp_dir):
    assert is_directory_empty(temp_dir)

    (temp_dir / "sub").mkdir()
    assert not is_directory_empty(temp_dir)
    assert is_directory_empty(temp_dir / "sub")


def test_is_directory_empty_missing_or_file(temp_dir):
    assert not is_directory_empty(temp_dir / "missing")
    (temp_dir / "file.txt").write_text("x")
    assert not is_directory_empty(temp_dir / "file.txt")


def test_move_file_creates_parents(temp_dir):
    source = temp_dir / "a.bundle"
    source.write_text("bundle")

    target = move_file(source, temp_dir / "deep" / "er" / "a.bundle")

    assert not source.exists()
    assert target.read_text() == "bundle"


def test_move_file_never_overwrites(temp_dir):
    source = temp_dir / "a.bundle"
    source.write_text("new")
    target = temp_dir / "b.bundle"
    target.write_text("old")

    with pytest.raises(FileExistsError):
        move_file(source, target)

    assert source.read_text() == "new"
    assert target.read_text() == "old"


def test_remove_file_if_present(temp_dir):
    path = temp_dir / "a.meta"
    path.write_text("x")

    assert remove_file_if_present(path) is True
    assert remove_file_if_present(path) is False


def test_normalize_path():
    assert normalize_path("Assets\\StreamingAssets\\") == "Assets/StreamingAssets"
    assert normalize_path("Assets/x/../StreamingAssets") == "Assets/StreamingAssets"


def test_ensure_directory(temp_dir):
    path = ensure_directory(temp_dir / "a" / "b")
    assert path.is_dir()
    assert ensure_directory(path) == path
