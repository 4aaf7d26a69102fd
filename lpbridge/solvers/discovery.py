"""Plugin discovery for solver adapters."""

from __future__ import annotations

from collections.abc import Callable

from lpbridge.solvers.base import SolverPlugin

PluginFactory = Callable[[], SolverPlugin | None]

_PLUGIN_FACTORIES: list[PluginFactory] = []
_BUILTINS_REGISTERED = False


def register_plugin(factory: PluginFactory) -> None:
    _PLUGIN_FACTORIES.append(factory)


def _register_builtin_plugins() -> None:
    global _BUILTINS_REGISTERED
    if _BUILTINS_REGISTERED:
        return

    from lpbridge.solvers.glpk import get_plugin as glpk_plugin

    register_plugin(glpk_plugin)
    _BUILTINS_REGISTERED = True


def discover_plugins() -> dict[str, SolverPlugin]:
    """Solvers whose factory reports them as usable on this machine."""
    _register_builtin_plugins()
    plugins: dict[str, SolverPlugin] = {}

    for factory in _PLUGIN_FACTORIES:
        plugin = factory()
        if plugin is None:
            continue
        plugins[plugin.name] = plugin

    return plugins
