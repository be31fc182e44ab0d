"""Built-in engine plugins."""

from __future__ import annotations

from rpt_resaver.adapters.crystal import CrystalReportsEngine
from rpt_resaver.plugins.base import EngineOptions


class CrystalEnginePlugin:
    """Resave reports through the SAP Crystal Reports .NET runtime.

    Notes
    -----
    Requires the ``crystal`` extra (pythonnet) and a Crystal Reports runtime
    installed on the host.
    """

    name = "crystal"

    def create_engine(self, options: EngineOptions) -> CrystalReportsEngine:
        """Load the runtime assemblies and return an engine.

        Parameters
        ----------
        options : Mapping[str, Any]
            Unused for the Crystal Reports engine.
        """
        del options
        return CrystalReportsEngine()
