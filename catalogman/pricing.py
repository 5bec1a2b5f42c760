"""
Configuration pricing.

A Configuration is one product, exactly one of its variants and a set of its
add-ons. compute_total() is a pure function of the configuration: it reads no
settings and performs no I/O. Amounts are added as Decimal, so the result
carries the precision of the input prices unless a quantum is given.
"""

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from catalogman.exceptions import InvalidAddonError, InvalidVariantError, NoVariantSelectedError

if TYPE_CHECKING:
    from catalogman.models import Addon, Product, Variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Configuration:
    """Transient selection of one variant plus zero-or-more add-ons."""

    product: "Product"
    variant: "Variant | None"
    addons: tuple["Addon", ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Add-ons form a set: the same add-on selected twice counts once.
        unique = {}
        for addon in self.addons:
            unique.setdefault(addon.pk if addon.pk is not None else id(addon), addon)
        object.__setattr__(self, "addons", tuple(unique.values()))


@dataclass(frozen=True)
class PriceBreakdown:
    """Priced configuration."""

    variant_price: Decimal
    addons_price: Decimal
    total: Decimal


def validate_configuration(configuration: Configuration) -> None:
    """
    Check a configuration against its product.

    Raises:
        NoVariantSelectedError: No variant selected
        InvalidVariantError: Variant belongs to another product
        InvalidAddonError: Add-on belongs to another product, or the
            product's type does not support add-ons
    """
    product = configuration.product
    variant = configuration.variant

    if variant is None:
        raise NoVariantSelectedError(product_id=product.pk)
    if variant.product_id != product.pk:
        raise InvalidVariantError(product_id=product.pk, variant_id=variant.pk)

    if configuration.addons and not product.supports_addons:
        raise InvalidAddonError(
            message=f"{product.product_type.name} products take no add-ons",
            product_id=product.pk,
            addon_id=configuration.addons[0].pk,
        )
    for addon in configuration.addons:
        if addon.product_id != product.pk:
            raise InvalidAddonError(product_id=product.pk, addon_id=addon.pk)


def price_breakdown(configuration: Configuration, quantum: Decimal | None = None) -> PriceBreakdown:
    """
    Price a configuration.

    Args:
        configuration: Product, selected variant and selected add-ons
        quantum: Optional rounding step (e.g. Decimal("0.01")); totals are
            rounded half-up only when given

    Returns:
        PriceBreakdown with variant price, add-ons subtotal and total
    """
    validate_configuration(configuration)

    variant_price = Decimal(configuration.variant.price)
    addons_price = sum((Decimal(addon.price) for addon in configuration.addons), Decimal("0"))
    total = variant_price + addons_price

    if quantum is not None:
        total = total.quantize(quantum, rounding=ROUND_HALF_UP)

    logger.debug(
        "Priced product %s variant %s with %d add-on(s): %s",
        configuration.product.pk,
        configuration.variant.pk,
        len(configuration.addons),
        total,
    )
    return PriceBreakdown(variant_price=variant_price, addons_price=addons_price, total=total)


def compute_total(configuration: Configuration, quantum: Decimal | None = None) -> Decimal:
    """Total price: variant price plus the price of every selected add-on."""
    return price_breakdown(configuration, quantum=quantum).total
