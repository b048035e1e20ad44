"""
Packaging metadata loader.

The upstream asset-pack build writes a JSON document of the form::

    {"Entries": [{"AssetsSubfolderPath": "pack1/a.bundle",
                  "BundleBuildPath": "Temp/Build/pack1.bundle"}]}

It is read once per relocation and never written here.
"""

import json
from pathlib import Path
from typing import List, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from asset_pack_relocator.relocation.errors import ManifestParseError


logger = structlog.get_logger("manifest")


class ManifestEntry(BaseModel):
    """One bundle produced upstream and the pack subpath it belongs in."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_build_path: str = Field(alias="BundleBuildPath", min_length=1)
    destination_sub_path: str = Field(alias="AssetsSubfolderPath", min_length=1)


class Manifest(BaseModel):
    """Ordered entries in upstream insertion order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    entries: List[ManifestEntry] = Field(default_factory=list, alias="Entries")

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def parse_manifest(contents: str, source: Union[str, Path, None] = None) -> Manifest:
    """
    Parse serialized packaging metadata.

    Args:
        contents: Raw JSON text
        source: Path the text was read from (used in error messages)

    Returns:
        Parsed Manifest

    Raises:
        ManifestParseError: If the text is not valid JSON or violates the schema
    """
    try:
        data = json.loads(contents)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Packaging metadata is not valid JSON: {e}", source) from e

    try:
        return Manifest.model_validate(data)
    except ValidationError as e:
        raise ManifestParseError(f"Invalid packaging metadata: {e}", source) from e


def load_manifest(path: Union[str, Path]) -> Manifest:
    """
    Load packaging metadata from disk.

    Raises:
        ManifestParseError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        contents = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestParseError(f"Cannot read packaging metadata: {e}", path) from e

    manifest = parse_manifest(contents, path)
    logger.debug("manifest_loaded", path=str(path), entries=len(manifest))
    return manifest
