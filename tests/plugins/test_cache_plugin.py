"""Tests for the built-in cache plugin."""

from __future__ import annotations

from pathlib import Path

from storectl.plugins.builtins.cache import CachePlugin


class TestCachePlugin:
    def test_empties_directory_but_keeps_it(self, tmp_path: Path) -> None:
        cache = tmp_path / ".storectl" / "cache"
        (cache / "smarty").mkdir(parents=True)
        (cache / "smarty" / "page.php").write_text("x")
        (cache / "index.html").write_text("x")

        plugin = CachePlugin(store_root=tmp_path)
        plugin.post_cache_clear(cache_dir=str(cache), reason="hook create")

        assert cache.is_dir()
        assert list(cache.iterdir()) == []
        assert plugin.cleared == [str(cache.resolve())]

    def test_missing_directory_is_noop(self, tmp_path: Path) -> None:
        plugin = CachePlugin(store_root=tmp_path)
        plugin.post_cache_clear(cache_dir=str(tmp_path / "nope"), reason="test")
        assert plugin.cleared == []

    def test_refuses_outside_root(self, tmp_path: Path) -> None:
        root = tmp_path / "store"
        root.mkdir()
        outside = tmp_path / "elsewhere"
        outside.mkdir()
        (outside / "keep.txt").write_text("x")

        plugin = CachePlugin(store_root=root)
        plugin.post_cache_clear(cache_dir=str(outside), reason="test")

        assert (outside / "keep.txt").exists()
        assert plugin.cleared == []
