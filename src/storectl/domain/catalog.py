"""Catalog value objects as seen by the cart: products and stock variants.

Both are read-only snapshots of rows owned by the catalog and inventory
tables. Nothing in the domain layer mutates them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A catalog product. Only visible products can be put in a cart."""

    model_config = {"frozen": True}

    id: int
    visible: bool = True
    ref: str = ""
    title: str = ""


class StockVariant(BaseModel):
    """A product sale element: one purchasable configuration with its own stock."""

    model_config = {"frozen": True}

    id: int
    product_id: int
    quantity: int = Field(default=0, ge=0)
    ref: str = ""
