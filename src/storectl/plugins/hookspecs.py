"""Store events and the pluggy hook specifications that receive them.

Every :class:`StoreEvent` value is the name of one hookspec below. Services
dispatch events through :class:`storectl.plugins.event_bus.EventBus`;
plugins implement the matching method with ``@hookimpl``.
"""

from __future__ import annotations

from enum import StrEnum

import pluggy

PROJECT_NAME = "storectl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class StoreEvent(StrEnum):
    """Events a store mutation can emit."""

    CACHE_CLEAR = "post_cache_clear"
    HOOK_CHANGE = "post_hook_change"
    CONFIG_WRITE = "post_config_write"
    CART_ADD = "post_cart_add"


class StorectlHookSpec:
    """Hook specifications for the storectl plugin system."""

    @hookspec
    def post_cache_clear(self, cache_dir: str, reason: str) -> None:
        """Called when rendered caches under *cache_dir* are stale.

        *reason* names the hook action that made them stale, e.g.
        ``"hook toggle_activation"``.
        """

    @hookspec
    def post_hook_change(self, action: str, hook_id: int, code: str) -> None:
        """Called after a hook record is created, updated, toggled, or deleted."""

    @hookspec
    def post_config_write(self, names: list[str]) -> None:
        """Called after store config values are written."""

    @hookspec
    def post_cart_add(
        self,
        cart_token: str,
        item_id: int,
        product_id: int,
        product_sale_elements_id: int | None,
        quantity: int,
    ) -> None:
        """Called after a validated line is written to a cart."""
