"""Tests for PluginManager — registration and plugin discovery for a store."""

from __future__ import annotations

import sys
from pathlib import Path

from storectl.plugins.hookspecs import hookimpl
from storectl.plugins.manager import CACHE_PLUGIN_NAME, PluginManager, has_hookimpls

_VALID_PLUGIN_SRC = """\
from storectl.plugins import hookimpl

calls: list[list[str]] = []


class ConfigAuditPlugin:
    \"\"\"Records config writes.\"\"\"

    @hookimpl
    def post_config_write(self, names: list[str]) -> None:
        calls.append(names)
"""

_SYNTAX_ERROR_SRC = """\
def broken(
"""

_NO_HOOKS_SRC = """\
class PlainClass:
    def hello(self) -> str:
        return "world"
"""

_BAD_INIT_SRC = """\
from storectl.plugins import hookimpl


class NeedsArgs:
    def __init__(self, token):
        self.token = token

    @hookimpl
    def post_config_write(self, names):
        pass
"""


class SamplePlugin:
    @hookimpl
    def post_hook_change(self, action: str, hook_id: int, code: str) -> None:
        self.last = (action, hook_id, code)


def _plugin_dir(store_root: Path) -> Path:
    path = store_root / ".storectl" / "plugins"
    path.mkdir(parents=True, exist_ok=True)
    return path


class TestRegistration:
    def test_register_with_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(SamplePlugin(), name="sample")
        assert "sample" in pm.plugin_names()

    def test_default_name_is_class_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(SamplePlugin())
        assert "SamplePlugin" in pm.plugin_names()

    def test_hook_dispatch(self) -> None:
        pm = PluginManager()
        plugin = SamplePlugin()
        pm.register_plugin(plugin)
        pm.hook.post_hook_change(action="create", hook_id=3, code="product.top")
        assert plugin.last == ("create", 3, "product.top")

    def test_has_hookimpls(self) -> None:
        assert has_hookimpls(SamplePlugin) is True
        assert has_hookimpls(object) is False


class TestLoad:
    def test_empty_store_gets_cache_plugin(self, tmp_path: Path) -> None:
        assert PluginManager().load(tmp_path) == [CACHE_PLUGIN_NAME]

    def test_cache_plugin_disabled(self, tmp_path: Path) -> None:
        assert CACHE_PLUGIN_NAME not in PluginManager().load(tmp_path, cache_enabled=False)

    def test_loads_local_plugin(self, tmp_path: Path) -> None:
        (_plugin_dir(tmp_path) / "audit.py").write_text(_VALID_PLUGIN_SRC)
        pm = PluginManager()
        names = pm.load(tmp_path)
        assert "storectl_local_plugin_audit" in names

        pm.hook.post_config_write(names=["store_name"])
        module = sys.modules["storectl_local_plugin_audit"]
        assert module.calls == [["store_name"]]

    def test_skips_unusable_files(self, tmp_path: Path) -> None:
        plugin_dir = _plugin_dir(tmp_path)
        (plugin_dir / "broken.py").write_text(_SYNTAX_ERROR_SRC)
        (plugin_dir / "plain.py").write_text(_NO_HOOKS_SRC)
        (plugin_dir / "needs_args.py").write_text(_BAD_INIT_SRC)
        (plugin_dir / "_private.py").write_text(_VALID_PLUGIN_SRC)

        names = PluginManager().load(tmp_path)

        assert names == [CACHE_PLUGIN_NAME]
        assert "storectl_local_plugin_broken" not in sys.modules
