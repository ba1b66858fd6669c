"""Shared pytest fixtures and test helpers for storectl tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from storectl.config.settings import StoreSettings
from storectl.infrastructure.database.engine import init_database
from storectl.infrastructure.store import Store


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's STORECTL_* environment out of the tests."""
    monkeypatch.delenv("STORECTL_CONFIG", raising=False)
    monkeypatch.delenv("STORECTL_CART__VERIFY_STOCK", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Temporary store directory. Shared by ``store`` and ``_isolated_store``."""
    return tmp_path


@pytest.fixture
def store(store_root: Path) -> Store:
    """Initialized store on a temp directory, without an event bus."""
    settings = StoreSettings.from_cli(store_root=store_root)
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def store_with_bus(store: Store) -> Store:
    """Store with a synchronous event bus and the built-in plugins."""
    store.init_event_bus(sync=True)
    return store


@pytest.fixture
def _isolated_store(store_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp store root so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_store")`` on command test
    classes.
    """
    monkeypatch.chdir(store_root)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service and command test modules)
# ---------------------------------------------------------------------------


def add_product(store: Store, ref: str, **kwargs: Any) -> dict[str, Any]:
    """Create a product via CatalogService, asserting success."""
    from storectl.services.catalog import CatalogService

    result = CatalogService(store).add_product(ref, **kwargs)
    assert result.ok, result.error
    return result.data


def add_variant(store: Store, product_id: int, quantity: int, **kwargs: Any) -> dict[str, Any]:
    """Create a sale element via CatalogService, asserting success."""
    from storectl.services.catalog import CatalogService

    result = CatalogService(store).add_variant(product_id, quantity=quantity, **kwargs)
    assert result.ok, result.error
    return result.data


def create_hook(store: Store, code: str, **kwargs: Any) -> dict[str, Any]:
    """Create a hook via HookService, asserting success."""
    from storectl.services.hooks import HookService

    result = HookService(store).create(code, **kwargs)
    assert result.ok, result.error
    return result.data


def add_customer(store: Store, email: str, **kwargs: Any) -> dict[str, Any]:
    """Create a customer via CustomerService, asserting success."""
    from storectl.services.customer import CustomerService

    result = CustomerService(store).add(email, **kwargs)
    assert result.ok, result.error
    return result.data
