"""
Configuration management for Asset Pack Relocator.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from enum import Enum
from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BuildMode(str, Enum):
    """Layout the relocation step should produce."""
    PACKAGED = "packaged"   # files grouped into {pack}.androidpack directories
    DEFAULT = "default"     # build tool's native output layout


class TargetPlatform(str, Enum):
    """Build targets the pre-build hook knows about."""
    ANDROID = "android"
    IOS = "ios"
    STANDALONE = "standalone"
    WEBGL = "webgl"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # -------------------------------------------------------------------------
    # Project Layout
    # -------------------------------------------------------------------------
    project_root: str = Field(default=".", description="Root of the host project")
    asset_root: str = Field(
        default="Assets",
        description="Directory tracked by the host asset database (relative to project root)"
    )

    # -------------------------------------------------------------------------
    # Auxiliary Files
    # -------------------------------------------------------------------------
    editor_pointer_path: str = Field(
        default="Assets/PlayAssetDelivery/Data/CustomAssetPacksData.json",
        description="Editor-time location of the pointer file"
    )
    runtime_root: str = Field(
        default="Assets/StreamingAssets",
        description="Streaming assets root that receives the pointer file"
    )
    pointer_file_name: str = Field(
        default="CustomAssetPacksData.json",
        description="File name of the pointer file inside the runtime root"
    )
    metadata_path: str = Field(
        default="Assets/PlayAssetDelivery/Data/BuildProcessorData.json",
        description="Packaging metadata (manifest) written by the upstream build step"
    )

    # -------------------------------------------------------------------------
    # Packaged Layout
    # -------------------------------------------------------------------------
    pack_root_template: str = Field(
        default="Assets/{pack_name}.androidpack",
        description="Directory pattern for a single content pack"
    )
    sidecar_suffix: str = Field(
        default=".meta",
        description="Suffix of the asset database sidecar files"
    )

    # -------------------------------------------------------------------------
    # Safety
    # -------------------------------------------------------------------------
    dry_run: bool = Field(
        default=False,
        description="Log planned relocations without modifying files"
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Log file path (optional)")

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def runtime_pointer_path(self) -> str:
        """Runtime location of the pointer file."""
        return f"{self.runtime_root.rstrip('/')}/{self.pointer_file_name}"

    def relocation_paths(self):
        """Build the path configuration consumed by the relocation engine."""
        from asset_pack_relocator.relocation.paths import RelocationPaths

        return RelocationPaths(
            project_root=Path(self.project_root),
            asset_root=Path(self.asset_root),
            editor_pointer_path=Path(self.editor_pointer_path),
            runtime_pointer_path=Path(self.runtime_pointer_path),
            runtime_root=Path(self.runtime_root),
            metadata_path=Path(self.metadata_path),
            pack_root_template=self.pack_root_template,
        )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the current settings instance."""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
