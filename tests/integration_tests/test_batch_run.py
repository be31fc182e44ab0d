"""Integration tests for a whole batch run through the public API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest
from fake_engine import FAKE_VERSION, FakeEngine

from rpt_resaver import resave_reports
from rpt_resaver.application import use_cases
from rpt_resaver.application.options import LogPaths
from rpt_resaver.errors import SourceDirectoryError
from rpt_resaver.schemas import ResaveRunConfig


def _lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


def _config(source_dir: Path, destination_dir: Path) -> ResaveRunConfig:
    return ResaveRunConfig(
        source_dir=source_dir,
        destination_dir=destination_dir,
        server_name="SQL01",
        database_name="Sales",
        user_id="report_user",
        password="s3cret",
    )


def _three_report_tree(root: Path) -> Path:
    nested = root / "regional"
    nested.mkdir(parents=True)
    (root / "orders.rpt").write_bytes(b"rpt")
    (nested / "invoices.rpt").write_bytes(b"rpt")
    (nested / "unreachable_stock.rpt").write_bytes(b"rpt")
    return root


def test_two_succeed_one_fails_at_refresh(tmp_path: Path) -> None:
    source = _three_report_tree(tmp_path / "legacy")
    destination = tmp_path / "resaved"
    paths = LogPaths.for_destination(destination)

    report = resave_reports(_config(source, destination), engine=FakeEngine())

    summary = report.summary
    assert (summary.total, summary.succeeded, summary.failed) == (3, 2, 1)
    assert summary.error_log_path == paths.errors

    versions = _lines(paths.versions)
    errors = _lines(paths.errors)
    assert len(versions) == 2
    assert len(errors) == 1
    for result in report.succeeded:
        assert result.output_path.parent == destination
        assert result.output_path.exists()
        assert any(str(result.source_path) in line for line in versions)
        assert not any(str(result.source_path) in line for line in errors)
        assert f"version: {FAKE_VERSION}" in result.log_line()
    failed = report.failed[0]
    assert errors == [f"Error processing file {failed.source_path}: verify failed: Logon failed."]
    assert not failed.output_path.exists()
    assert sorted(p.name for p in destination.glob("*.rpt")) == ["invoices.rpt", "orders.rpt"]
    assert _lines(paths.summary) == summary.render().splitlines()


def test_rerun_appends_logs_and_overwrites_outputs(tmp_path: Path) -> None:
    source = _three_report_tree(tmp_path / "legacy")
    destination = tmp_path / "resaved"
    paths = LogPaths.for_destination(destination)
    config = _config(source, destination)

    resave_reports(config, engine=FakeEngine())
    (destination / "orders.rpt").write_text("stale")
    second = resave_reports(config, engine=FakeEngine())

    assert second.summary.total == 3
    assert len(_lines(paths.versions)) == 4
    assert len(_lines(paths.errors)) == 2
    assert _lines(paths.summary).count("Total .rpt files: 3") == 2
    assert (destination / "orders.rpt").read_text() == "resaved orders.rpt\n"


def test_missing_destination_is_created_with_fresh_logs(tmp_path: Path) -> None:
    source = tmp_path / "legacy"
    source.mkdir()
    (source / "orders.rpt").write_bytes(b"rpt")
    destination = tmp_path / "a" / "b" / "resaved"

    report = resave_reports(_config(source, destination), engine=FakeEngine())

    paths = LogPaths.for_destination(destination)
    assert destination.is_dir()
    assert report.summary.succeeded == 1
    assert _lines(paths.versions)[0].startswith(f"Report {source / 'orders.rpt'} ")
    assert not paths.errors.exists()


def test_sub_document_parameters_are_not_defaulted(tmp_path: Path) -> None:
    source = tmp_path / "legacy"
    source.mkdir()
    (source / "orders.rpt").write_bytes(b"rpt")
    engine = FakeEngine()

    resave_reports(_config(source, tmp_path / "out"), engine=engine)

    document = engine.documents[0]
    region, line_filter = document.parameters
    assert len(region.values) == 1
    assert region.values[0].value is None
    assert line_filter.values == []
    all_tables = document.table_list + document.subreport_list[0].table_list
    assert all(table.connection is not None for table in all_tables)
    assert document.closed is True


def test_empty_source_produces_zero_summary(tmp_path: Path) -> None:
    source = tmp_path / "legacy"
    source.mkdir()

    report = resave_reports(_config(source, tmp_path / "out"), engine=FakeEngine())

    assert (report.summary.total, report.summary.succeeded, report.summary.failed) == (0, 0, 0)
    assert report.results == ()


def test_destination_inside_source_is_not_rescanned(tmp_path: Path) -> None:
    """Outputs written under the source tree are never picked up as inputs."""
    source = tmp_path / "legacy"
    source.mkdir()
    (source / "orders.rpt").write_bytes(b"rpt")
    (source / "invoices.rpt").write_bytes(b"rpt")
    destination = source / "resaved"
    config = _config(source, destination)

    first = resave_reports(config, engine=FakeEngine())
    second = resave_reports(config, engine=FakeEngine())

    assert (first.summary.total, first.summary.succeeded) == (2, 2)
    assert second.summary.total == 2
    assert all(r.source_path.parent == source for r in second.results)
    assert len(_lines(LogPaths.for_destination(destination).versions)) == 4


def test_log_write_failure_does_not_change_counts(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """An unwritable error log is reported while the run completes normally."""
    source = _three_report_tree(tmp_path / "legacy")
    destination = tmp_path / "resaved"
    paths = LogPaths.for_destination(destination)
    paths.errors.mkdir(parents=True)

    with caplog.at_level(logging.ERROR):
        report = resave_reports(_config(source, destination), engine=FakeEngine())

    summary = report.summary
    assert (summary.total, summary.succeeded, summary.failed) == (3, 2, 1)
    assert "Failed to write to log file" in caplog.text
    assert len(_lines(paths.versions)) == 2
    assert _lines(paths.summary) == summary.render().splitlines()


def test_unreadable_subdirectory_stops_before_processing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Enumeration errors are fatal and no report is touched before them."""
    source = tmp_path / "legacy"
    source.mkdir()
    (source / "orders.rpt").write_bytes(b"rpt")
    destination = tmp_path / "resaved"

    def walk_with_denied_subdir(top: object, onerror: Any = None, **_: object) -> Any:
        yield str(top), ["locked"], ["orders.rpt"]
        onerror(PermissionError(13, "Permission denied", str(source / "locked")))

    monkeypatch.setattr(use_cases.os, "walk", walk_with_denied_subdir)
    engine = FakeEngine()

    with pytest.raises(SourceDirectoryError, match="Unable to enumerate .*locked"):
        resave_reports(_config(source, destination), engine=engine)

    assert engine.documents == []
    assert not (destination / "orders.rpt").exists()
    assert not LogPaths.for_destination(destination).versions.exists()
