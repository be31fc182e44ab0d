"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal, TypeAlias


@dataclass(frozen=True)
class FileSucceeded:
    """Report was loaded, refreshed and saved."""

    source_path: Path
    output_path: Path
    engine_version: str
    outcome: Literal["succeeded"] = "succeeded"

    @property
    def ok(self) -> bool:
        return True

    def log_line(self) -> str:
        """Render the version log entry for this file."""
        return (
            f"Report {self.source_path} is using Crystal Reports version: "
            f"{self.engine_version}"
        )


@dataclass(frozen=True)
class FileFailed:
    """Report processing stopped at the first engine failure."""

    source_path: Path
    output_path: Path
    message: str
    outcome: Literal["failed"] = "failed"

    @property
    def ok(self) -> bool:
        return False

    def log_line(self) -> str:
        """Render the error log entry for this file."""
        return f"Error processing file {self.source_path}: {self.message}"


FileResult: TypeAlias = FileSucceeded | FileFailed


@dataclass(frozen=True)
class RunSummary:
    """Counters folded from per-file results."""

    error_log_path: Path
    total: int = 0
    succeeded: int = 0
    failed: int = 0

    @classmethod
    def empty(cls, error_log_path: Path) -> RunSummary:
        return cls(error_log_path=error_log_path)

    def add(self, result: FileResult) -> RunSummary:
        """Return a new summary that accounts for ``result``."""
        if result.ok:
            return replace(self, total=self.total + 1, succeeded=self.succeeded + 1)
        return replace(self, total=self.total + 1, failed=self.failed + 1)

    def render(self) -> str:
        """Render the summary block printed and appended to the summary log."""
        return (
            f"Total .rpt files: {self.total}\n"
            f"Successfully processed files: {self.succeeded}\n"
            f"Files with errors: {self.failed}\n"
            f"Error log file: {self.error_log_path}"
        )


@dataclass(frozen=True)
class BatchReport:
    """Structured outcome of a whole run."""

    summary: RunSummary
    results: tuple[FileResult, ...] = ()

    @property
    def succeeded(self) -> tuple[FileSucceeded, ...]:
        return tuple(r for r in self.results if isinstance(r, FileSucceeded))

    @property
    def failed(self) -> tuple[FileFailed, ...]:
        return tuple(r for r in self.results if isinstance(r, FileFailed))
