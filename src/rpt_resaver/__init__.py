"""Top-level API for batch resaving of legacy report files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from rpt_resaver.application.ports import ReportEngine
from rpt_resaver.application.results import BatchReport
from rpt_resaver.schemas import ConnectionDescriptor, ResaveRunConfig

__version__ = "0.1.0"


def resave_reports(
    config: ResaveRunConfig,
    *,
    engine: ReportEngine | None = None,
    engine_name: str = "crystal",
    engine_modules: Iterable[str] | None = None,
) -> BatchReport:
    """Load, rebind, refresh and resave every report in a source tree.

    Parameters
    ----------
    config : ResaveRunConfig
        Source and destination directories plus database login.
    engine : ReportEngine | None, default=None
        Engine instance. When omitted, ``engine_name`` is resolved through
        the plugin registry.
    engine_name : str, default="crystal"
        Registered engine name.
    engine_modules : Iterable[str] | None, default=None
        Trusted modules (import path or file path) registering extra engines.

    Returns
    -------
    BatchReport
        Run summary and per-file results.

    Notes
    -----
    The summary is appended to the summary log, not printed. Print
    ``report.summary.render()`` to show it, as the CLI does.
    """
    from .api import resave_reports as _impl

    return _impl(
        config,
        engine=engine,
        engine_name=engine_name,
        engine_modules=engine_modules,
    )


def resave_directory(
    source_dir: Path,
    destination_dir: Path,
    server_name: str,
    database_name: str,
    user_id: str,
    password: str,
    *,
    engine: ReportEngine | None = None,
    engine_name: str = "crystal",
    engine_modules: Iterable[str] | None = None,
) -> BatchReport:
    """Validate raw inputs and resave every report under ``source_dir``."""
    from .api import resave_directory as _impl

    return _impl(
        source_dir=source_dir,
        destination_dir=destination_dir,
        server_name=server_name,
        database_name=database_name,
        user_id=user_id,
        password=password,
        engine=engine,
        engine_name=engine_name,
        engine_modules=engine_modules,
    )


__all__ = [
    "BatchReport",
    "ConnectionDescriptor",
    "ResaveRunConfig",
    "resave_directory",
    "resave_reports",
]
