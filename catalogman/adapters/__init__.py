"""Catalogman adapters."""

from catalogman.adapters.catalog_backend import CatalogmanCatalogBackend

__all__ = [
    "CatalogmanCatalogBackend",
]
