"""CatalogBackend implementation for Catalogman."""

from catalogman.conf import catalogman_settings
from catalogman.exceptions import NotFoundError
from catalogman.pricing import price_breakdown
from catalogman.protocols import (
    AddonInfo,
    CatalogBackend,
    PriceInfo,
    ProductInfo,
    ProductTypeInfo,
    VariantInfo,
)
from catalogman.service import CatalogService


class CatalogmanCatalogBackend:
    """
    CatalogBackend implementation using Catalogman's catalog service.

    Converts models into plain frozen dataclasses so an API layer can
    render catalog data without direct model access.
    """

    def get_product(self, product_id: int) -> ProductInfo | None:
        """Return product by id."""
        try:
            product = CatalogService.get_product(product_id)
        except NotFoundError:
            return None
        return self._product_info(product)

    def list_products(self) -> list[ProductInfo]:
        """Return all products."""
        return [self._product_info(p) for p in CatalogService.list_products()]

    def list_products_by_type(self, type_name: str) -> list[ProductInfo]:
        """Return products of one type."""
        return [self._product_info(p) for p in CatalogService.list_products_by_type(type_name)]

    def price_configuration(
        self,
        product_id: int,
        variant_id: int | None,
        addon_ids: list[int] | None = None,
    ) -> PriceInfo:
        """Return price of a configuration."""
        configuration = CatalogService.configure(product_id, variant_id, addon_ids or [])
        breakdown = price_breakdown(configuration, quantum=catalogman_settings.price_quantum)
        return PriceInfo(
            product_id=configuration.product.pk,
            variant_id=configuration.variant.pk,
            addon_ids=[addon.pk for addon in configuration.addons],
            variant_price=breakdown.variant_price,
            addons_price=breakdown.addons_price,
            total=breakdown.total,
        )

    def _product_info(self, product) -> ProductInfo:
        variants = list(product.variants.all())
        default = product.default_variant
        return ProductInfo(
            id=product.pk,
            name=product.name,
            description=product.description,
            images=list(product.images),
            display_image=product.display_image,
            product_type=ProductTypeInfo(
                id=product.product_type.pk,
                name=product.product_type.name,
                supports_addons=product.product_type.supports_addons,
            ),
            variants=[
                VariantInfo(
                    id=v.pk,
                    sku=v.sku,
                    label=v.label,
                    price=v.price,
                    stock=v.stock,
                    size=v.size,
                    color=v.color,
                )
                for v in variants
            ],
            addons=[AddonInfo(id=a.pk, name=a.name, price=a.price) for a in product.addons.all()],
            default_variant_id=default.pk if default else None,
        )


# Verify implementation at import time
if not isinstance(CatalogmanCatalogBackend(), CatalogBackend):
    raise TypeError("CatalogmanCatalogBackend does not implement CatalogBackend protocol")
