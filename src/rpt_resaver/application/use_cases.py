"""Application use-cases orchestrating batch resave workflows."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import closing
from pathlib import Path

from pydantic import ValidationError

from rpt_resaver.application.options import LogPaths, ResaveOptions
from rpt_resaver.application.ports import ReportDocument, ReportEngine, RunLog
from rpt_resaver.application.results import (
    BatchReport,
    FileFailed,
    FileResult,
    FileSucceeded,
    RunSummary,
)
from rpt_resaver.errors import ConfigurationError, SourceDirectoryError
from rpt_resaver.infrastructure.run_logs import RunLogWriter
from rpt_resaver.schemas import ConnectionDescriptor, ResaveRunConfig
from rpt_resaver.types import NULL_DISCRETE_VALUE

logger = logging.getLogger(__name__)


def build_run_config(
    *,
    source_dir: Path,
    destination_dir: Path,
    server_name: str,
    database_name: str,
    user_id: str,
    password: str,
) -> ResaveRunConfig:
    """Build validated run configuration from command/API params."""
    try:
        return ResaveRunConfig(
            source_dir=source_dir,
            destination_dir=destination_dir,
            server_name=server_name,
            database_name=database_name,
            user_id=user_id,
            password=password,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid resave parameters: {exc}") from exc


def ensure_destination(destination_dir: Path) -> None:
    """Create ``destination_dir`` and any missing parents.

    ``OSError`` propagates: a run cannot proceed without its output directory.
    """
    destination_dir.mkdir(parents=True, exist_ok=True)


def _raise_walk_error(exc: OSError) -> None:
    raise SourceDirectoryError(f"Unable to enumerate {exc.filename}: {exc}") from exc


def discover_report_files(
    source_dir: Path,
    options: ResaveOptions | None = None,
    *,
    exclude_dir: Path | None = None,
) -> Iterator[Path]:
    """Yield report files under ``source_dir`` in filesystem enumeration order.

    ``exclude_dir`` and everything below it is skipped, so a destination
    nested in the source tree never feeds its own outputs back in.

    Raises
    ------
    SourceDirectoryError
        If the directory does not exist or a subdirectory cannot be read.
    """
    suffix = (options or ResaveOptions()).report_suffix.lower()
    if not source_dir.is_dir():
        raise SourceDirectoryError(f"Source directory not found: {source_dir}")
    excluded = exclude_dir.resolve() if exclude_dir is not None else None
    for root, dirs, files in os.walk(source_dir, onerror=_raise_walk_error):
        if excluded is not None:
            dirs[:] = [d for d in dirs if (Path(root) / d).resolve() != excluded]
        for filename in files:
            candidate = Path(root) / filename
            if candidate.suffix.lower() == suffix and candidate.is_file():
                yield candidate


def output_path_for(
    source_path: Path, destination_dir: Path, options: ResaveOptions | None = None
) -> Path:
    """Return the flat destination path for ``source_path``."""
    suffix = (options or ResaveOptions()).report_suffix
    return destination_dir / f"{source_path.stem}{suffix}"


def apply_logon_info(document: ReportDocument, connection: ConnectionDescriptor) -> int:
    """Bind ``connection`` to every table of the document and its sub-documents.

    Returns
    -------
    int
        Number of tables updated.
    """
    updated = 0
    for table in document.tables():
        table.apply_logon_info(connection)
        updated += 1
    for subreport in document.subreports():
        for table in subreport.tables():
            table.apply_logon_info(connection)
            updated += 1
    logger.debug("Applied logon info to %d table(s) of %s", updated, document.name)
    return updated


def _is_main_report_field(report_name: str, document_name: str) -> bool:
    return report_name == "" or report_name == document_name


def apply_default_parameter_values(document: ReportDocument) -> list[str]:
    """Bind a null value to each unset main-document parameter.

    Sub-document parameters are left as they are.

    Returns
    -------
    list[str]
        Names of the parameters that received a default.
    """
    defaulted: list[str] = []
    for field in document.parameter_fields():
        if not _is_main_report_field(field.report_name, document.name):
            continue
        if len(field.current_values()) == 0:
            field.apply_current_values([NULL_DISCRETE_VALUE])
            defaulted.append(field.name)
    if defaulted:
        logger.debug("Defaulted parameters %s of %s", ", ".join(defaulted), document.name)
    return defaulted


def _resave_document(
    document: ReportDocument,
    connection: ConnectionDescriptor,
    output_path: Path,
) -> None:
    apply_logon_info(document, connection)

    document.verify_database()
    document.refresh()
    logger.info("Data loaded into the report.")

    document.enable_save_data_with_report()
    apply_default_parameter_values(document)

    document.save_as(output_path, overwrite=True)
    logger.info("Report saved as %s.", output_path)


def process_report_file(
    *,
    source_path: Path,
    destination_dir: Path,
    connection: ConnectionDescriptor,
    engine: ReportEngine,
    run_log: RunLog,
    options: ResaveOptions | None = None,
) -> FileResult:
    """Use-case: load, rebind, refresh and resave a single report.

    Every failure is caught here and returned as ``FileFailed``; the
    matching log line is appended before returning.
    """
    output_path = output_path_for(source_path, destination_dir, options)
    result: FileResult
    try:
        with closing(engine.load(source_path)) as document:
            logger.info("Report %s loaded successfully.", source_path)
            _resave_document(document, connection, output_path)
            result = FileSucceeded(
                source_path=source_path,
                output_path=output_path,
                engine_version=engine.version(),
            )
    except Exception as exc:
        result = FileFailed(
            source_path=source_path,
            output_path=output_path,
            message=str(exc),
        )
        logger.error("%s", result.log_line())
    else:
        logger.info("%s", result.log_line())

    run_log.record(result)
    return result


def run_batch(
    *,
    config: ResaveRunConfig,
    engine: ReportEngine,
    run_log: RunLog | None = None,
    options: ResaveOptions | None = None,
) -> BatchReport:
    """Use-case: resave every report under the source directory."""
    options = options or ResaveOptions()
    log_paths = LogPaths.for_destination(config.destination_dir, options)

    ensure_destination(config.destination_dir)
    run_log = run_log or RunLogWriter(log_paths)
    connection = config.connection

    # Enumerate completely before writing any output.
    source_paths = list(
        discover_report_files(
            config.source_dir, options, exclude_dir=config.destination_dir
        )
    )
    logger.debug("Found %d report file(s) under %s", len(source_paths), config.source_dir)

    summary = RunSummary.empty(log_paths.errors)
    results: list[FileResult] = []
    for source_path in source_paths:
        result = process_report_file(
            source_path=source_path,
            destination_dir=config.destination_dir,
            connection=connection,
            engine=engine,
            run_log=run_log,
            options=options,
        )
        results.append(result)
        summary = summary.add(result)

    run_log.record_summary(summary)
    return BatchReport(summary=summary, results=tuple(results))
