"""Append-only text log adapter implementation."""

from __future__ import annotations

import logging
from pathlib import Path

from rpt_resaver.application.options import LogPaths
from rpt_resaver.application.results import FileResult, RunSummary

logger = logging.getLogger(__name__)


def append_line(path: Path, line: str) -> bool:
    """Append ``line`` to ``path``, creating the file when missing.

    Write failures are reported on the console and otherwise ignored.

    Returns
    -------
    bool
        ``True`` if the line was written.
    """
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"{line}\n")
    except OSError as exc:
        logger.error("Failed to write to log file %s: %s", path, exc)
        return False
    return True


class RunLogWriter:
    """Default run log implementation backed by three text files."""

    def __init__(self, paths: LogPaths) -> None:
        self.paths = paths

    def record(self, result: FileResult) -> None:
        """Append ``result`` to the version log or the error log.

        Parameters
        ----------
        result : FileResult
            Outcome of processing a single report.
        """
        target = self.paths.versions if result.ok else self.paths.errors
        append_line(target, result.log_line())

    def record_summary(self, summary: RunSummary) -> None:
        """Append the rendered run summary to the summary log."""
        append_line(self.paths.summary, summary.render())
