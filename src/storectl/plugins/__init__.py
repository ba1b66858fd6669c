"""Extension layer — plugin system via pluggy.

Plugins implement the hooks in :mod:`storectl.plugins.hookspecs` with
``@hookimpl`` and receive one call per :class:`StoreEvent`.
INVARIANT: Plugin failures are warnings, never errors.
"""

from storectl.plugins.event_bus import DrainReport, EventBus, EventStatus
from storectl.plugins.hookspecs import StoreEvent, hookimpl
from storectl.plugins.manager import PluginManager

__all__ = ["DrainReport", "EventBus", "EventStatus", "PluginManager", "StoreEvent", "hookimpl"]
