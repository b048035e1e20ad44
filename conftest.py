"""
Shared pytest fixtures for Asset Pack Relocator tests.

Provides a throwaway project layout on disk, the path configuration that
points at it, and a recording asset tracker standing in for the host editor.
"""

import json
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from asset_pack_relocator.relocation.engine import RelocationEngine
from asset_pack_relocator.relocation.paths import PathResolver, RelocationPaths


POINTER_EDITOR_PATH = "Assets/PlayAssetDelivery/Data/CustomAssetPacksData.json"
RUNTIME_ROOT = "Assets/StreamingAssets"
POINTER_RUNTIME_PATH = "Assets/StreamingAssets/CustomAssetPacksData.json"
METADATA_PATH = "Assets/PlayAssetDelivery/Data/BuildProcessorData.json"


class RecordingTracker:
    """Asset tracker fake that records every call."""

    def __init__(self):
        self.imported = []
        self.deleted = []

    def notify_imported(self, path):
        self.imported.append(Path(path))

    def delete_tracked_or_raw(self, path):
        self.deleted.append(Path(path))
        shutil.rmtree(path)


# -------------------------------------------------------------------------
# Temporary Directory Fixtures
# -------------------------------------------------------------------------

@pytest.fixture
def temp_dir():
    """
    Provide a temporary directory for test files.

    Creates a temporary directory that is automatically cleaned up after the test.
    Returns a pathlib.Path object.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def project_root(temp_dir):
    """Project root with an empty Assets folder."""
    (temp_dir / "Assets").mkdir()
    return temp_dir


# -------------------------------------------------------------------------
# Relocation Fixtures
# -------------------------------------------------------------------------

@pytest.fixture
def relocation_paths(project_root):
    """Default host layout anchored at the temporary project root."""
    return RelocationPaths(
        project_root=project_root,
        editor_pointer_path=Path(POINTER_EDITOR_PATH),
        runtime_pointer_path=Path(POINTER_RUNTIME_PATH),
        runtime_root=Path(RUNTIME_ROOT),
        metadata_path=Path(METADATA_PATH),
        pack_root_template="Assets/{pack_name}.androidpack",
        asset_root=Path("Assets"),
    )


@pytest.fixture
def resolver(relocation_paths):
    return PathResolver(relocation_paths)


@pytest.fixture
def recording_tracker():
    return RecordingTracker()


@pytest.fixture
def engine(resolver, recording_tracker):
    """Relocation engine wired to the temporary project and the recording tracker."""
    return RelocationEngine(resolver=resolver, tracker=recording_tracker)


@pytest.fixture
def write_manifest(project_root):
    """
    Write packaging metadata for a list of (source, destination) pairs.

    Returns the path of the metadata file.
    """
    def _write(pairs):
        path = project_root / METADATA_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        entries = [
            {"AssetsSubfolderPath": destination, "BundleBuildPath": source}
            for source, destination in pairs
        ]
        path.write_text(json.dumps({"Entries": entries}), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_file(project_root):
    """Create a file (and its parents) under the project root."""
    def _write(relative_path, content="data"):
        path = project_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


def snapshot(root: Path) -> dict:
    """Map of relative file path -> content for every file under ``root``."""
    return {
        str(p.relative_to(root)).replace("\\", "/"): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


# -------------------------------------------------------------------------
# Pytest Configuration
# -------------------------------------------------------------------------

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: mark test as slow running"
    )
