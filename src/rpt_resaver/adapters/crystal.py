"""Crystal Reports engine adapter over the .NET runtime.

The SAP Crystal Reports runtime is reached through pythonnet (``clr``),
which is imported lazily so the rest of the package works without it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rpt_resaver.errors import DependencyError
from rpt_resaver.schemas import ConnectionDescriptor
from rpt_resaver.types import DiscreteParameterValue

ENGINE_ASSEMBLY = "CrystalDecisions.CrystalReports.Engine"
SHARED_ASSEMBLY = "CrystalDecisions.Shared"


@dataclass(frozen=True)
class CrystalRuntime:
    """Constructors for the .NET types used by the adapter."""

    report_document: Callable[[], Any]
    connection_info: Callable[[], Any]
    parameter_values: Callable[[], Any]
    parameter_discrete_value: Callable[[], Any]
    version: str


def load_crystal_runtime() -> CrystalRuntime:
    """Load the Crystal Reports assemblies through pythonnet.

    Raises
    ------
    DependencyError
        If pythonnet or the Crystal Reports runtime is not installed.
    """
    try:
        import clr
    except Exception as exc:
        raise DependencyError(
            "pythonnet is required for the Crystal Reports engine."
        ) from exc

    try:
        clr.AddReference(ENGINE_ASSEMBLY)
        clr.AddReference(SHARED_ASSEMBLY)
        from CrystalDecisions.CrystalReports.Engine import ReportDocument
        from CrystalDecisions.Shared import (
            ConnectionInfo,
            ParameterDiscreteValue,
            ParameterValues,
        )
    except Exception as exc:
        raise DependencyError(
            "SAP Crystal Reports runtime assemblies could not be loaded."
        ) from exc

    version = clr.GetClrType(ReportDocument).Assembly.GetName().Version.ToString()
    return CrystalRuntime(
        report_document=ReportDocument,
        connection_info=ConnectionInfo,
        parameter_values=ParameterValues,
        parameter_discrete_value=ParameterDiscreteValue,
        version=str(version),
    )


class CrystalTable:
    """Wrap a ``CrystalDecisions.CrystalReports.Engine.Table``."""

    def __init__(self, table: Any, runtime: CrystalRuntime) -> None:
        self._table = table
        self._runtime = runtime

    @property
    def name(self) -> str:
        return str(self._table.Name)

    def apply_logon_info(self, connection: ConnectionDescriptor) -> None:
        info = self._table.LogOnInfo
        connection_info = self._runtime.connection_info()
        connection_info.ServerName = connection.server_name
        connection_info.DatabaseName = connection.database_name
        connection_info.UserID = connection.user_id
        connection_info.Password = connection.password.get_secret_value()
        info.ConnectionInfo = connection_info
        self._table.ApplyLogOnInfo(info)


class CrystalParameterField:
    """Wrap a ``ParameterFieldDefinition``."""

    def __init__(self, field: Any, runtime: CrystalRuntime) -> None:
        self._field = field
        self._runtime = runtime

    @property
    def name(self) -> str:
        return str(self._field.Name)

    @property
    def report_name(self) -> str:
        return str(self._field.ReportName or "")

    def current_values(self) -> Sequence[object]:
        return list(self._field.CurrentValues)

    def apply_current_values(self, values: Sequence[DiscreteParameterValue]) -> None:
        bound = self._runtime.parameter_values()
        for item in values:
            discrete = self._runtime.parameter_discrete_value()
            discrete.Value = item.value
            bound.Add(discrete)
        self._field.ApplyCurrentValues(bound)


class CrystalSubreport:
    """Wrap a sub-document of a ``ReportDocument``."""

    def __init__(self, document: Any, runtime: CrystalRuntime) -> None:
        self._document = document
        self._runtime = runtime

    @property
    def name(self) -> str:
        return str(self._document.Name)

    def tables(self) -> Sequence[CrystalTable]:
        return [CrystalTable(t, self._runtime) for t in self._document.Database.Tables]


class CrystalReportDocument:
    """Wrap a loaded ``ReportDocument``."""

    def __init__(self, document: Any, runtime: CrystalRuntime) -> None:
        self._document = document
        self._runtime = runtime

    @property
    def name(self) -> str:
        return str(self._document.Name)

    def tables(self) -> Sequence[CrystalTable]:
        return [CrystalTable(t, self._runtime) for t in self._document.Database.Tables]

    def subreports(self) -> Sequence[CrystalSubreport]:
        return [CrystalSubreport(s, self._runtime) for s in self._document.Subreports]

    def verify_database(self) -> None:
        self._document.VerifyDatabase()

    def refresh(self) -> None:
        self._document.Refresh()

    def enable_save_data_with_report(self) -> None:
        self._document.ReportOptions.EnableSaveDataWithReport = True

    def parameter_fields(self) -> Sequence[CrystalParameterField]:
        return [
            CrystalParameterField(f, self._runtime)
            for f in self._document.DataDefinition.ParameterFields
        ]

    def save_as(self, path: Path, overwrite: bool = True) -> None:
        self._document.SaveAs(str(path), overwrite)

    def close(self) -> None:
        self._document.Close()
        self._document.Dispose()


class CrystalReportsEngine:
    """Load ``.rpt`` files through the Crystal Reports runtime."""

    def __init__(self, runtime: CrystalRuntime | None = None) -> None:
        self._runtime = runtime or load_crystal_runtime()

    def load(self, path: Path) -> CrystalReportDocument:
        """Load a report file.

        Parameters
        ----------
        path : Path
            Path to the ``.rpt`` file.

        Returns
        -------
        CrystalReportDocument
            Loaded document. The caller owns it and must ``close()`` it.
        """
        document = self._runtime.report_document()
        try:
            document.Load(str(path))
        except Exception:
            document.Close()
            document.Dispose()
            raise
        return CrystalReportDocument(document, self._runtime)

    def version(self) -> str:
        """Return the ``CrystalDecisions.CrystalReports.Engine`` assembly version."""
        return self._runtime.version
