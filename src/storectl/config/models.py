"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, storectl.toml only contains overrides.
A fresh store needs only [store] name.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- storectl.toml sections ---


class StoreSection(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    name: str = "my-store"
    locale: str = "en_US"


class CartConfig(BaseModel):
    """[cart] section.

    ``verify_stock`` is the fallback used when the store's ``config``
    table holds no ``verifyStock`` row.
    """

    model_config = {"frozen": True}

    verify_stock: bool = True


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    dir: str = ".storectl/cache"


class EventsConfig(BaseModel):
    """[events] section."""

    model_config = {"frozen": True}

    max_retries: int = 3
    max_workers: int = 2


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    cache: dict[str, Any] = Field(default_factory=lambda: {"enabled": True})

