"""
Pre-build hook integration.

The host pipeline calls every registered hook before a player build, lowest
``callback_order`` first. The relocation hook asks for order 0 so bundles are
in place before the generic hook that stages packaged data for the player.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

import structlog

from asset_pack_relocator.config import BuildMode, TargetPlatform
from asset_pack_relocator.relocation.engine import RelocationEngine, RelocationResult


logger = structlog.get_logger("hooks")


@dataclass(frozen=True)
class BuildReport:
    """What the host pipeline knows about the build about to run."""
    target_platform: TargetPlatform
    build_app_bundle: bool = False


class PreprocessBuild(Protocol):
    callback_order: int

    def on_preprocess_build(self, report: BuildReport): ...


def select_mode(report: BuildReport) -> Optional[BuildMode]:
    """
    Choose the relocation mode for a build.

    Only Android builds carry asset packs; every other target returns None.
    """
    if TargetPlatform(report.target_platform) != TargetPlatform.ANDROID:
        return None
    return BuildMode.PACKAGED if report.build_app_bundle else BuildMode.DEFAULT


class PreprocessBuildHook:
    """Runs the relocation engine for Android builds."""

    callback_order = 0

    def __init__(self, engine: Optional[RelocationEngine] = None):
        self._engine = engine

    @property
    def engine(self) -> RelocationEngine:
        """Lazy-load the engine from global settings."""
        if self._engine is None:
            self._engine = RelocationEngine.from_settings()
        return self._engine

    def on_preprocess_build(self, report: BuildReport) -> Optional[RelocationResult]:
        mode = select_mode(report)
        if mode is None:
            logger.debug("relocation_not_required", target=TargetPlatform(report.target_platform).value)
            return None
        return self.engine.relocate(mode)


def run_preprocess_hooks(hooks: Iterable[PreprocessBuild], report: BuildReport) -> list:
    """
    Invoke hooks in ascending ``callback_order``; ties keep registration order.

    The first exception aborts the remaining hooks and propagates to the caller.
    """
    results = []
    for hook in sorted(hooks, key=lambda h: h.callback_order):
        logger.debug("running_preprocess_hook", hook=type(hook).__name__, order=hook.callback_order)
        results.append(hook.on_preprocess_build(report))
    return results
