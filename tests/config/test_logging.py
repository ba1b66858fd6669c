"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from storectl.config.logging import bind_store, configure_logging, unbind_store


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    store_logger = logging.getLogger("storectl")
    store_level = store_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    store_logger.setLevel(store_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("storectl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("storectl").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("storectl.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "storectl.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)

        logging.getLogger("storectl.services.cart").debug("Cart default line 1")

        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "Cart default line 1"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "storectl.services.cart"

    def test_quiet_by_default(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        logging.getLogger("storectl.services.cart").debug("hidden")
        assert capfd.readouterr().err == ""

    def test_third_party_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("alembic").debug("migration noise")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1


class TestStoreBinding:
    def test_records_carry_store(self, tmp_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_store(tmp_path, "acme")
        try:
            logging.getLogger("storectl.services.cart").warning("low stock")
        finally:
            unbind_store()

        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["store"] == "acme"
        assert parsed["store_root"] == str(tmp_path)

    def test_unbind_removes_store(self, tmp_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        bind_store(tmp_path, "acme")
        unbind_store()

        logging.getLogger("storectl.services.cart").warning("after close")

        assert "store" not in json.loads(capfd.readouterr().err.strip())
