"""Plugin protocol for reporting engines."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from rpt_resaver.application.ports import ReportEngine

EngineOptions = Mapping[str, Any]


@runtime_checkable
class EnginePlugin(Protocol):
    """Protocol implemented by engine plugins."""

    name: str

    def create_engine(self, options: EngineOptions) -> ReportEngine:
        """Construct an engine instance.

        Parameters
        ----------
        options : Mapping[str, Any]
            Raw engine options.

        Returns
        -------
        ReportEngine
            Engine able to load and save report files.
        """
