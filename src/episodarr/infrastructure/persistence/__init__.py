"""Catalog store implementations."""

from .catalog_factory import CatalogBackend, create_catalog_repository
from .diskcache_catalog import DiskcacheCatalogRepository
from .http_catalog import HttpCatalogRepository
from .memory_catalog import InMemoryCatalogRepository

__all__ = [
    "CatalogBackend",
    "DiskcacheCatalogRepository",
    "HttpCatalogRepository",
    "InMemoryCatalogRepository",
    "create_catalog_repository",
]
