"""Catalogman admin."""

from catalogman.admin.product import AddonInline, ProductAdmin, ProductTypeAdmin, VariantInline

__all__ = [
    "AddonInline",
    "ProductAdmin",
    "ProductTypeAdmin",
    "VariantInline",
]
