"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from rpt_resaver.application.results import FileResult, RunSummary
from rpt_resaver.schemas import ConnectionDescriptor
from rpt_resaver.types import DiscreteParameterValue


class ReportTable(Protocol):
    """Database table referenced by a report."""

    name: str

    def apply_logon_info(self, connection: ConnectionDescriptor) -> None:
        """Overwrite the table's login info with ``connection``."""


class ParameterField(Protocol):
    """Declared report parameter and its bound values."""

    name: str
    report_name: str

    def current_values(self) -> Sequence[object]:
        """Return values currently bound to the parameter."""

    def apply_current_values(self, values: Sequence[DiscreteParameterValue]) -> None:
        """Replace the bound values."""


class Subreport(Protocol):
    """Report embedded in a main report."""

    name: str

    def tables(self) -> Sequence[ReportTable]:
        """Return tables referenced by this sub-document."""


class ReportDocument(Protocol):
    """In-memory handle of a loaded report."""

    name: str

    def tables(self) -> Sequence[ReportTable]:
        """Return tables referenced by the main document."""

    def subreports(self) -> Sequence[Subreport]:
        """Return embedded sub-documents."""

    def verify_database(self) -> None:
        """Check the expected schema against the live database."""

    def refresh(self) -> None:
        """Re-execute queries to populate data."""

    def enable_save_data_with_report(self) -> None:
        """Persist fetched data inside the saved file."""

    def parameter_fields(self) -> Sequence[ParameterField]:
        """Return every declared parameter, sub-document ones included."""

    def save_as(self, path: Path, overwrite: bool = True) -> None:
        """Save the document to ``path``."""

    def close(self) -> None:
        """Release engine resources held by the document."""


class ReportEngine(Protocol):
    """Load report files into in-memory documents."""

    def load(self, path: Path) -> ReportDocument:
        """Load report from path."""

    def version(self) -> str:
        """Return the engine's version identifier."""


class RunLog(Protocol):
    """Append-only record of a run."""

    def record(self, result: FileResult) -> None:
        """Append the log line for a per-file result."""

    def record_summary(self, summary: RunSummary) -> None:
        """Append the run summary block."""
