"""Exception hierarchy for report resaving."""

from __future__ import annotations


class ResaverError(Exception):
    """Base error for all resaver failures."""

    exit_code = 1


class DependencyError(ResaverError):
    """Raised when an optional engine runtime is not installed."""


class PluginError(ResaverError):
    """Raised when an engine plugin cannot be registered or resolved."""


class SourceDirectoryError(ResaverError):
    """Raised when the source directory cannot be enumerated."""


class ConfigurationError(ResaverError):
    """Raised when run configuration is invalid."""

    exit_code = 2
