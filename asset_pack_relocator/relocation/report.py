"""
Relocation Report for Asset Pack Relocator.

Tracks every operation performed (or planned, in dry-run mode) during one
relocation so the build log can show exactly what moved where.
"""

import json
from pathlib import Path
from datetime import datetime, timezone
from typing import Dict, List, Optional
import structlog


OPERATION_STATISTICS = {
    "create_dir": "directories_created",
    "move": "files_moved",
    "import": "imports_notified",
    "delete_sidecar": "sidecars_deleted",
    "delete_dir": "directories_deleted",
    "skip": "entries_skipped",
}


class RelocationReport:
    """Collects relocation operations and their statistics."""

    def __init__(self, mode: str, dry_run: bool = False):
        self.logger = structlog.get_logger("relocation_report")
        self.mode = mode
        self.dry_run = dry_run
        self.operations: List[Dict] = []
        self.errors: List[Dict] = []
        self.statistics: Dict = {
            "total_entries": 0,
            "directories_created": 0,
            "files_moved": 0,
            "imports_notified": 0,
            "sidecars_deleted": 0,
            "directories_deleted": 0,
            "entries_skipped": 0,
            "errors": 0
        }

    def add_operation(
        self,
        operation_type: str,
        source_path: Optional[str] = None,
        target_path: Optional[str] = None,
        reason: Optional[str] = None
    ):
        """
        Add an operation to the report.

        Args:
            operation_type: One of 'create_dir', 'move', 'import',
                'delete_sidecar', 'delete_dir', 'skip'
            source_path: Source file/directory path
            target_path: Target file/directory path
            reason: Why the operation was skipped (skip only)
        """
        # A dry run plans the same parent directory once per file
        if operation_type == "create_dir" and any(
            op["type"] == "create_dir" and op.get("target") == target_path
            for op in self.operations
        ):
            return

        operation = {
            "type": operation_type,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        if source_path:
            operation["source"] = source_path
        if target_path:
            operation["target"] = target_path
        if reason:
            operation["reason"] = reason

        self.operations.append(operation)

        counter = OPERATION_STATISTICS.get(operation_type)
        if counter:
            self.statistics[counter] += 1

    def add_error(self, error: str, path: Optional[str] = None):
        """Record the error that aborted the relocation."""
        error_entry = {
            "error": error,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        if path:
            error_entry["path"] = path

        self.errors.append(error_entry)
        self.statistics["errors"] += 1

    def set_total_entries(self, count: int):
        """Set the number of manifest entries considered."""
        self.statistics["total_entries"] = count

    def get_summary(self) -> Dict:
        """
        Get a summary of operations.

        Returns:
            Dictionary with operation statistics
        """
        return {
            "mode": self.mode,
            "dry_run": self.dry_run,
            **self.statistics,
            "operations_count": len(self.operations),
        }

    def write(self, output_path: Path) -> Path:
        """
        Write the complete report as JSON.

        Args:
            output_path: Path where the report should be saved

        Returns:
            Path to the written report
        """
        report = {
            "mode": self.mode,
            "dry_run": self.dry_run,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "statistics": self.statistics,
            "operations": self.operations,
            "errors": self.errors
        }

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)

        self.logger.info(
            "report_written",
            path=str(output_path),
            operations=len(self.operations),
            errors=len(self.errors)
        )

        return output_path
