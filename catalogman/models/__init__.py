"""Catalogman models."""

from catalogman.models.product import Product
from catalogman.models.product_type import ProductType
from catalogman.models.variant import Addon, Variant

__all__ = [
    "Addon",
    "Product",
    "ProductType",
    "Variant",
]
