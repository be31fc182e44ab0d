"""Public batch resave API (delegates to application use-cases)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Optional

from rpt_resaver.application.ports import ReportEngine
from rpt_resaver.application.results import BatchReport
from rpt_resaver.application.use_cases import build_run_config, run_batch
from rpt_resaver.plugins.registry import DEFAULT_ENGINE, create_default_registry
from rpt_resaver.schemas import ResaveRunConfig


def resolve_engine(
    engine_name: str = DEFAULT_ENGINE,
    engine_modules: Optional[Iterable[str]] = None,
    engine_options: Optional[Mapping[str, object]] = None,
) -> ReportEngine:
    """Construct a registered engine by name."""
    registry = create_default_registry(extra_modules=engine_modules)
    return registry.create_engine(engine_name, engine_options)


def resave_reports(
    config: ResaveRunConfig,
    *,
    engine: Optional[ReportEngine] = None,
    engine_name: str = DEFAULT_ENGINE,
    engine_modules: Optional[Iterable[str]] = None,
) -> BatchReport:
    """Resave every report under ``config.source_dir``.

    The summary is appended to the summary log but not printed; callers
    print ``report.summary.render()`` themselves, as the CLI does.
    """
    engine = engine or resolve_engine(engine_name, engine_modules)
    return run_batch(config=config, engine=engine)


def resave_directory(
    source_dir: Path,
    destination_dir: Path,
    server_name: str,
    database_name: str,
    user_id: str,
    password: str,
    engine: Optional[ReportEngine] = None,
    engine_name: str = DEFAULT_ENGINE,
    engine_modules: Optional[Iterable[str]] = None,
) -> BatchReport:
    """Validate raw inputs and resave every report under ``source_dir``."""
    config = build_run_config(
        source_dir=source_dir,
        destination_dir=destination_dir,
        server_name=server_name,
        database_name=database_name,
        user_id=user_id,
        password=password,
    )
    return resave_reports(
        config,
        engine=engine,
        engine_name=engine_name,
        engine_modules=engine_modules,
    )
