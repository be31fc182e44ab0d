"""Engine plugin registry and discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from rpt_resaver.application.ports import ReportEngine
from rpt_resaver.errors import PluginError
from rpt_resaver.plugins.base import EngineOptions, EnginePlugin
from rpt_resaver.plugins.builtins import CrystalEnginePlugin

DEFAULT_ENGINE = CrystalEnginePlugin.name


class EngineRegistry:
    """Registry for engine plugins."""

    def __init__(self) -> None:
        self._plugins: dict[str, EnginePlugin] = {}

    def register(self, plugin: EnginePlugin) -> None:
        """Register plugin instance by unique name.

        Raises
        ------
        PluginError
            If plugin does not provide a valid name.
        """
        name = getattr(plugin, "name", "").strip()
        if not name:
            raise PluginError("Engine plugin must define a non-empty 'name'.")
        self._plugins[name] = plugin

    def names(self) -> list[str]:
        """Return registered engine names, sorted."""
        return sorted(self._plugins.keys())

    def get(self, name: str) -> EnginePlugin:
        """Get plugin by name.

        Raises
        ------
        PluginError
            If plugin name is not registered.
        """
        try:
            return self._plugins[name]
        except KeyError as exc:
            raise PluginError(
                f"Unknown engine '{name}'. Available engines: {', '.join(self.names())}"
            ) from exc

    def create_engine(
        self, name: str, options: EngineOptions | None = None
    ) -> ReportEngine:
        """Resolve ``name`` and construct its engine."""
        return self.get(name).create_engine(dict(options or {}))

    def load_module(self, module_or_path: str) -> None:
        """Load engine plugins from module name or file path.

        .. warning::
            This method executes code from the specified module. Only load
            plugins from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    .. warning::
        This function executes arbitrary Python code from the specified module
        or file. Plugin loading should only happen on explicit user intent
        (``--engine-module``) and never with untrusted paths.

    Raises
    ------
    PluginError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise PluginError(f"Unable to load engine module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise PluginError(
            f"Unable to import engine module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: EngineRegistry) -> None:
    """Register engine plugins found in module."""
    if hasattr(module, "register_plugins"):
        module.register_plugins(registry)
        return

    plugins_obj = getattr(module, "PLUGINS", None)
    if plugins_obj is not None:
        for plugin in plugins_obj:
            registry.register(plugin)
        return

    plugin_obj = getattr(module, "PLUGIN", None)
    if plugin_obj is not None:
        registry.register(plugin_obj)
        return

    raise PluginError(
        "Engine module must expose register_plugins(registry), PLUGINS, or PLUGIN."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> EngineRegistry:
    """Create registry with the built-in engine and any extra modules."""
    registry = EngineRegistry()
    registry.register(CrystalEnginePlugin())
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
