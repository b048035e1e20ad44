"""
Asset Pack Relocator - command line entry point.

Runs the relocation step outside the host editor, e.g. from a CI build
script:

    asset-pack-relocator --mode packaged --project-root ./MyGame
    asset-pack-relocator --target android --app-bundle --report build/relocation.json
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import structlog

from asset_pack_relocator.config import BuildMode, Settings, TargetPlatform, get_settings
from asset_pack_relocator.hooks import BuildReport, PreprocessBuildHook, run_preprocess_hooks
from asset_pack_relocator.relocation import RelocationEngine, RelocationError


logger = structlog.get_logger("relocator")


def configure_logging(settings: Settings, json_logs: bool = False):
    """Configure structlog on top of stdlib logging."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)

    log_path = os.path.abspath(settings.log_file) if settings.log_file else None
    root_logger = logging.getLogger()
    already_attached = any(
        isinstance(h, logging.FileHandler) and h.baseFilename == log_path
        for h in root_logger.handlers
    )
    if log_path and not already_attached:
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        root_logger.addHandler(file_handler)

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Move asset pack bundles between the default and packaged build layouts"
    )
    selector = parser.add_mutually_exclusive_group(required=True)
    selector.add_argument(
        "--mode", "-m",
        choices=[m.value for m in BuildMode],
        help="Layout to produce"
    )
    selector.add_argument(
        "--target", "-t",
        choices=[p.value for p in TargetPlatform],
        help="Build target; the mode is derived from it and --app-bundle"
    )
    parser.add_argument("--app-bundle", action="store_true", help="Build is an Android App Bundle")
    parser.add_argument("--project-root", "-p", help="Project root (overrides PROJECT_ROOT)")
    parser.add_argument("--dry-run", action="store_true", help="Report planned moves only")
    parser.add_argument("--report", "-r", help="Write a JSON report of all operations here")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser


def main(argv: Optional[list] = None) -> int:
    """Run one relocation and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.app_bundle and not args.target:
        parser.error("--app-bundle requires --target")

    overrides = {}
    if args.project_root:
        overrides["project_root"] = args.project_root
    if args.dry_run:
        overrides["dry_run"] = True
    settings = get_settings().model_copy(update=overrides)

    configure_logging(settings, json_logs=args.json_logs)

    engine = RelocationEngine.from_settings(settings)

    try:
        if args.mode:
            results = [engine.relocate(BuildMode(args.mode))]
        else:
            build = BuildReport(
                target_platform=TargetPlatform(args.target),
                build_app_bundle=args.app_bundle
            )
            results = run_preprocess_hooks([PreprocessBuildHook(engine)], build)
    except RelocationError as e:
        logger.error("relocation_failed", error=str(e))
        return 1
    finally:
        if args.report and engine.last_report is not None:
            engine.last_report.write(Path(args.report))

    for result in results:
        if result is None:
            logger.info("nothing_to_relocate", target=args.target)
            continue
        print(json.dumps(result.to_dict(), indent=2))

    return 0


def cli():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
