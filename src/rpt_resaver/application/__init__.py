"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from rpt_resaver.application.options import LogPaths, ResaveOptions
from rpt_resaver.application.ports import ReportEngine, RunLog
from rpt_resaver.application.results import (
    BatchReport,
    FileFailed,
    FileResult,
    FileSucceeded,
    RunSummary,
)
from rpt_resaver.schemas import ConnectionDescriptor, ResaveRunConfig


def build_run_config(
    *,
    source_dir: Path,
    destination_dir: Path,
    server_name: str,
    database_name: str,
    user_id: str,
    password: str,
) -> ResaveRunConfig:
    """Build validated run configuration via lazy use-case import."""
    from rpt_resaver.application.use_cases import build_run_config as _impl

    return _impl(
        source_dir=source_dir,
        destination_dir=destination_dir,
        server_name=server_name,
        database_name=database_name,
        user_id=user_id,
        password=password,
    )


def process_report_file(
    *,
    source_path: Path,
    destination_dir: Path,
    connection: ConnectionDescriptor,
    engine: ReportEngine,
    run_log: RunLog,
    options: ResaveOptions | None = None,
) -> FileResult:
    """Resave a single report via lazy use-case import."""
    from rpt_resaver.application.use_cases import process_report_file as _impl

    return _impl(
        source_path=source_path,
        destination_dir=destination_dir,
        connection=connection,
        engine=engine,
        run_log=run_log,
        options=options,
    )


def run_batch(
    *,
    config: ResaveRunConfig,
    engine: ReportEngine,
    run_log: RunLog | None = None,
    options: ResaveOptions | None = None,
) -> BatchReport:
    """Resave a whole source tree via lazy use-case import."""
    from rpt_resaver.application.use_cases import run_batch as _impl

    return _impl(config=config, engine=engine, run_log=run_log, options=options)


__all__ = [
    "BatchReport",
    "FileFailed",
    "FileResult",
    "FileSucceeded",
    "LogPaths",
    "ResaveOptions",
    "RunSummary",
    "build_run_config",
    "process_report_file",
    "run_batch",
]
