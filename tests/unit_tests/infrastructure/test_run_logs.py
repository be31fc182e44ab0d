"""Unit tests for the append-only run log writer."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from rpt_resaver.application.options import LogPaths
from rpt_resaver.application.results import FileFailed, FileSucceeded, RunSummary
from rpt_resaver.infrastructure.run_logs import RunLogWriter, append_line


def test_append_line_creates_then_appends(tmp_path: Path) -> None:
    target = tmp_path / "log.txt"
    assert append_line(target, "first") is True
    assert append_line(target, "second") is True
    assert target.read_text(encoding="utf-8") == "first\nsecond\n"


def test_append_line_failure_is_reported_not_raised(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """A directory in place of the log file makes the write fail softly."""
    target = tmp_path / "log.txt"
    target.mkdir()

    with caplog.at_level(logging.ERROR):
        assert append_line(target, "lost") is False

    assert "Failed to write to log file" in caplog.text


def test_writer_routes_results_to_separate_logs(tmp_path: Path) -> None:
    paths = LogPaths.for_destination(tmp_path)
    writer = RunLogWriter(paths)

    writer.record(
        FileSucceeded(
            source_path=Path("a.rpt"),
            output_path=tmp_path / "a.rpt",
            engine_version="13.0",
        )
    )
    writer.record(
        FileFailed(
            source_path=Path("b.rpt"),
            output_path=tmp_path / "b.rpt",
            message="boom",
        )
    )
    writer.record_summary(RunSummary(paths.errors, total=2, succeeded=1, failed=1))

    assert paths.versions.read_text().splitlines() == [
        "Report a.rpt is using Crystal Reports version: 13.0"
    ]
    assert paths.errors.read_text().splitlines() == [
        "Error processing file b.rpt: boom"
    ]
    assert paths.summary.read_text().startswith("Total .rpt files: 2\n")


def test_log_paths_use_fixed_names(tmp_path: Path) -> None:
    paths = LogPaths.for_destination(tmp_path)
    assert paths.versions.name == "report_versions_log.txt"
    assert paths.errors.name == "report_errors_log.txt"
    assert paths.summary.name == "report_summary_log.txt"
