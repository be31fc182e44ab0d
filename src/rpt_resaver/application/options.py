"""Typed option objects shared across resave use-cases."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ResaveOptions:
    """File naming conventions for a resave run."""

    report_suffix: str = ".rpt"
    versions_log_name: str = "report_versions_log.txt"
    errors_log_name: str = "report_errors_log.txt"
    summary_log_name: str = "report_summary_log.txt"


@dataclass(frozen=True)
class LogPaths:
    """Locations of the three append-only run logs."""

    versions: Path
    errors: Path
    summary: Path

    @classmethod
    def for_destination(
        cls, destination_dir: Path, options: ResaveOptions | None = None
    ) -> LogPaths:
        """Build log paths rooted at ``destination_dir``."""
        options = options or ResaveOptions()
        return cls(
            versions=destination_dir / options.versions_log_name,
            errors=destination_dir / options.errors_log_name,
            summary=destination_dir / options.summary_log_name,
        )
