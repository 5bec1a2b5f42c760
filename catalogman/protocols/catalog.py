"""Catalog protocols."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ProductTypeInfo:
    """Product type information."""

    id: int
    name: str
    supports_addons: bool


@dataclass(frozen=True)
class VariantInfo:
    """Variant information."""

    id: int
    sku: str
    label: str
    price: Decimal
    stock: int
    size: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class AddonInfo:
    """Add-on information."""

    id: int
    name: str
    price: Decimal


@dataclass(frozen=True)
class ProductInfo:
    """Product information with its type, variants and add-ons.

    display_image is the first image, or the configured placeholder.
    """

    id: int
    name: str
    description: str
    images: list[str]
    display_image: str
    product_type: ProductTypeInfo
    variants: list[VariantInfo] = field(default_factory=list)
    addons: list[AddonInfo] = field(default_factory=list)
    default_variant_id: int | None = None


@dataclass(frozen=True)
class PriceInfo:
    """Price of a configuration."""

    product_id: int
    variant_id: int
    addon_ids: list[int]
    variant_price: Decimal
    addons_price: Decimal
    total: Decimal


@runtime_checkable
class CatalogBackend(Protocol):
    """Interface for catalog queries."""

    def get_product(self, product_id: int) -> ProductInfo | None:
        """Return product by id."""
        ...

    def list_products(self) -> list[ProductInfo]:
        """Return all products."""
        ...

    def list_products_by_type(self, type_name: str) -> list[ProductInfo]:
        """Return products of one type."""
        ...

    def price_configuration(
        self,
        product_id: int,
        variant_id: int | None,
        addon_ids: list[int] | None = None,
    ) -> PriceInfo:
        """Return price of a configuration."""
        ...
