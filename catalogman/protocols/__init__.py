"""Catalogman protocols."""

from catalogman.protocols.catalog import (
    AddonInfo,
    CatalogBackend,
    PriceInfo,
    ProductInfo,
    ProductTypeInfo,
    VariantInfo,
)

__all__ = [
    "AddonInfo",
    "CatalogBackend",
    "PriceInfo",
    "ProductInfo",
    "ProductTypeInfo",
    "VariantInfo",
]
