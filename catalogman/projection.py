"""
Catalog browsing projection.

Pure transformations over already-fetched products:

    group_by_type(products)            - {type name: [products]} in encounter order
    filter_by_type(grouped, active)    - "All" keeps everything, else one group
    by_type_name(products, type_name)  - Flat exact-match filter
    type_options(product_types)        - Filter bar entries, "All" first
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from django.core.exceptions import ObjectDoesNotExist

if TYPE_CHECKING:
    from catalogman.models import Product, ProductType

ALL_TYPES = "All"
OTHER_GROUP = "Other"


@dataclass(frozen=True)
class CatalogView:
    """Browsing view: grouped products plus the filter bar state."""

    groups: dict[str, list["Product"]]
    active_type: str = ALL_TYPES
    type_options: list[str] = field(default_factory=lambda: [ALL_TYPES])


def type_name_of(product: "Product") -> str | None:
    """Name of the product's type, or None when the type is not resolved."""
    try:
        product_type = product.product_type
    except ObjectDoesNotExist:
        return None
    return product_type.name if product_type is not None else None


def group_by_type(products: Iterable["Product"]) -> dict[str, list["Product"]]:
    """
    Group products by type name.

    Groups appear in the order their first product is encountered, and each
    group keeps the input order. Products without a type go to "Other".
    """
    grouped: dict[str, list[Product]] = {}
    for product in products:
        key = type_name_of(product) or OTHER_GROUP
        grouped.setdefault(key, []).append(product)
    return grouped


def filter_by_type(
    grouped: Mapping[str, list["Product"]],
    active_type: str,
) -> dict[str, list["Product"]]:
    """Keep every group for "All", otherwise only the group named active_type."""
    if active_type == ALL_TYPES:
        return dict(grouped)
    if active_type in grouped:
        return {active_type: grouped[active_type]}
    return {}


def by_type_name(products: Iterable["Product"], type_name: str) -> list["Product"]:
    return [product for product in products if type_name_of(product) == type_name]


def type_options(product_types: Iterable["ProductType"]) -> list[str]:
    return [ALL_TYPES, *(product_type.name for product_type in product_types)]
