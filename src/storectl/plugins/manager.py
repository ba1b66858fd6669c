"""Plugin loading for one store.

Plugins come from three places, registered in this order:

1. ``storectl.plugins`` entry points of installed distributions;
2. single-file plugins in ``{store_root}/.storectl/plugins/*.py``;
3. the built-in cache plugin, unless ``[plugins] cache`` disables it.

A plugin that fails to import or instantiate is logged and skipped.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from typing import TYPE_CHECKING

import pluggy

from storectl.infrastructure.database.engine import STATE_DIRNAME
from storectl.plugins.builtins.cache import CachePlugin
from storectl.plugins.hookspecs import PROJECT_NAME, StorectlHookSpec

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from types import ModuleType

ENTRY_POINT_GROUP = "storectl.plugins"
LOCAL_MODULE_PREFIX = "storectl_local_plugin_"
CACHE_PLUGIN_NAME = "cache-builtin"

# Attribute pluggy's HookimplMarker sets on decorated methods.
_IMPL_ATTR = f"{PROJECT_NAME}_impl"

logger = logging.getLogger(__name__)


class PluginManager:
    """The store's plugin registry and its hook relay."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(StorectlHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def load(self, store_root: Path, *, cache_enabled: bool = True) -> list[str]:
        """Register every plugin available to the store at *store_root*.

        Returns the registered plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_entry_point_classes()

        for name, plugin in _local_plugins(store_root / STATE_DIRNAME / "plugins"):
            self.register_plugin(plugin, name=name)

        if cache_enabled:
            self.register_plugin(CachePlugin(store_root=store_root), name=CACHE_PLUGIN_NAME)
        return self.plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        resolved = name or type(plugin).__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin %s", resolved)

    def plugin_names(self) -> list[str]:
        return sorted(self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins())

    def _instantiate_entry_point_classes(self) -> None:
        """Swap plugin classes registered by entry points for instances.

        An entry point may name a class rather than an object; registered
        as-is its hook methods would be called unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not (inspect.isclass(plugin) and has_hookimpls(plugin)):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Could not instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)


def has_hookimpls(cls: type) -> bool:
    """Whether *cls* defines at least one public ``@hookimpl`` method."""
    return any(
        callable(member) and getattr(member, _IMPL_ATTR, None)
        for attr, member in inspect.getmembers(cls)
        if not attr.startswith("_")
    )


def _local_plugins(plugin_dir: Path) -> Iterator[tuple[str, object]]:
    """Yield ``(name, instance)`` for each plugin class found in *plugin_dir*.

    Files whose name starts with ``_`` are ignored.
    """
    if not plugin_dir.is_dir():
        return
    for py_file in sorted(plugin_dir.glob("*.py")):
        if py_file.name.startswith("_"):
            continue
        module = _import_file(py_file)
        if module is None:
            continue
        for cls in _plugin_classes(module):
            try:
                plugin = cls()
            except Exception:
                logger.warning(
                    "Could not instantiate %s from %s", cls.__name__, py_file, exc_info=True
                )
                continue
            yield module.__name__, plugin


def _import_file(py_file: Path) -> ModuleType | None:
    module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
    spec = importlib.util.spec_from_file_location(module_name, py_file)
    if spec is None or spec.loader is None:
        logger.warning("Not an importable plugin file: %s", py_file)
        return None

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Could not load local plugin %s", py_file, exc_info=True)
        return None
    return module


def _plugin_classes(module: ModuleType) -> list[type]:
    """Classes defined in *module* itself that implement at least one hook."""
    return [
        cls
        for _, cls in inspect.getmembers(module, inspect.isclass)
        if cls.__module__ == module.__name__ and has_hookimpls(cls)
    ]
