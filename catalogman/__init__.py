"""
Django Catalogman - Product catalog with variants, add-ons and configuration pricing.

Usage:
    from catalogman import CatalogService, CatalogError

    food = CatalogService.create_product_type("Food")
    burger = CatalogService.create_product("Burger", "Grilled beef", food.pk, images=[])
    variant = CatalogService.add_variant(burger.pk, price="5.00", stock=10, sku="BRG-1")
    cheese = CatalogService.add_addon(burger.pk, "Cheese", "1.00")
    total = CatalogService.price_configuration(burger.pk, variant.pk, [cheese.pk])
"""


def __getattr__(name):
    if name == "CatalogService":
        from catalogman.service import CatalogService

        return CatalogService
    elif name == "CatalogError":
        from catalogman.exceptions import CatalogError

        return CatalogError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["CatalogService", "CatalogError"]
__version__ = "0.1.0"
