"""Read-side repositories wrapping SQLAlchemy Core queries."""

from storectl.infrastructure.repositories.catalog import CatalogRepository
from storectl.infrastructure.repositories.config import ConfigRepository

__all__ = ["CatalogRepository", "ConfigRepository"]
