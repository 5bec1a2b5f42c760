"""
Catalogman public API.

TYPES & PRODUCTS:
    CatalogService.create_product_type(name)   - Create a product type
    CatalogService.list_product_types()        - All product types
    CatalogService.create_product(...)         - Create a product
    CatalogService.list_products()             - All products with type, variants, add-ons
    CatalogService.get_product(id)             - Get product
    CatalogService.delete_product(id)          - Delete product (cascades to children)
    CatalogService.list_products_by_type(name) - Products of one type

CHILDREN:
    CatalogService.add_variant(...)            - Add a variant to a product
    CatalogService.add_addon(...)              - Add an add-on (add-on capable types only)

CONFIGURATION:
    CatalogService.configure(...)              - Resolve ids into a Configuration
    CatalogService.price_configuration(...)    - Total price of a configuration

BROWSING:
    CatalogService.browse(active_type)         - Products grouped by type, filtered
"""

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction

from catalogman import projection, rules
from catalogman.conf import catalogman_settings
from catalogman.exceptions import (
    InvalidAddonError,
    InvalidVariantError,
    NoVariantSelectedError,
    NotFoundError,
    ValidationError,
)
from catalogman.pricing import Configuration, compute_total

if TYPE_CHECKING:
    from catalogman.models import Addon, Product, ProductType, Variant

logger = logging.getLogger(__name__)


class CatalogService:
    """
    Catalogman public API.

    Uses @classmethod for extensibility: subclass and override the
    _fetch_* hooks for caching or alternative stores.

    Every mutation validates first and writes inside a single transaction;
    children lock their parent product so a concurrent delete cannot slip
    between the existence check and the insert.
    """

    # ======================================================================
    # PRODUCT TYPES
    # ======================================================================

    @classmethod
    def create_product_type(cls, name: str, supports_addons: bool | None = None) -> "ProductType":
        """
        Create a product type.

        Args:
            name: Unique type name (e.g. "Food")
            supports_addons: Add-on capability. When None, it is derived from
                CATALOGMAN["ADDON_TYPE_NAMES"] (case-insensitive name match)

        Raises:
            ValidationError: Empty name or name already taken
        """
        from catalogman.models import ProductType

        data = rules.validate_product_type_creation({"name": name, "supports_addons": supports_addons})
        if data["supports_addons"] is None:
            data["supports_addons"] = rules.supports_addons_by_default(
                data["name"], catalogman_settings.ADDON_TYPE_NAMES
            )

        try:
            with transaction.atomic():
                if ProductType.objects.filter(name=data["name"]).exists():
                    raise ValidationError("name", f"Product type {data['name']!r} already exists")
                product_type = ProductType.objects.create(**data)
        except IntegrityError:
            raise ValidationError("name", f"Product type {data['name']!r} already exists") from None

        logger.info(
            "Created product type %s (%s), supports_addons=%s",
            product_type.pk,
            product_type.name,
            product_type.supports_addons,
        )
        return product_type

    @classmethod
    def list_product_types(cls) -> list["ProductType"]:
        from catalogman.models import ProductType

        return list(ProductType.objects.all())

    # ======================================================================
    # PRODUCTS
    # ======================================================================

    @classmethod
    def create_product(
        cls,
        name: str,
        description: str,
        product_type_id: int,
        images: list[str],
    ) -> "Product":
        """
        Create a product.

        Raises:
            ValidationError: Missing name/description/type, or images not a list
            NotFoundError: product_type_id does not exist
        """
        from catalogman.models import Product, ProductType

        data = rules.validate_product_creation(
            {
                "name": name,
                "description": description,
                "product_type_id": product_type_id,
                "images": images,
            }
        )
        product_type = ProductType.objects.filter(pk=data["product_type_id"]).first()
        if product_type is None:
            raise NotFoundError("ProductType", data["product_type_id"])

        with transaction.atomic():
            product = Product(
                name=data["name"],
                description=data["description"],
                images=data["images"],
                product_type=product_type,
            )
            cls._save(product)

        logger.info("Created product %s (%s) of type %s", product.pk, product.name, product_type.name)
        return product

    @classmethod
    def list_products(cls) -> list["Product"]:
        """All products, ordered by id, with type, variants and add-ons loaded."""
        from catalogman.models import Product

        return list(Product.objects.with_details())

    @classmethod
    def get_product(cls, product_id: int) -> "Product":
        """
        Get product by id, with type, variants and add-ons loaded.

        Raises:
            NotFoundError: Product does not exist
        """
        product = cls._fetch_product(cls._coerce_id("Product", product_id))
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    @classmethod
    def _fetch_product(cls, product_id: int) -> "Product | None":
        """Internal: fetch product by id. Override for caching, etc."""
        from catalogman.models import Product

        return Product.objects.with_details().filter(pk=product_id).first()

    @classmethod
    def delete_product(cls, product_id: int) -> "Product":
        """
        Delete a product together with its variants and add-ons.

        Returns:
            The deleted product (pk cleared by Django)

        Raises:
            NotFoundError: Product does not exist
        """
        from catalogman.models import Product
        from catalogman.signals import product_deleted

        pk = cls._coerce_id("Product", product_id)
        with transaction.atomic():
            product = cls._lock_product(pk)
            product.delete()

        product_deleted.send(sender=Product, instance=product, product_id=pk)
        logger.info("Deleted product %s (%s)", pk, product.name)
        return product

    @classmethod
    def list_products_by_type(cls, type_name: str) -> list["Product"]:
        """Products whose type name matches type_name exactly (case-sensitive)."""
        return projection.by_type_name(cls.list_products(), type_name)

    # ======================================================================
    # VARIANTS & ADD-ONS
    # ======================================================================

    @classmethod
    def add_variant(
        cls,
        product_id: int,
        price: Decimal | int | str,
        stock: int,
        sku: str,
        size: str | None = None,
        color: str | None = None,
    ) -> "Variant":
        """
        Add a variant to a product.

        Raises:
            NotFoundError: Product does not exist
            ValidationError: Empty SKU, SKU already used, missing or negative price/stock
        """
        from catalogman.models import Variant

        pk = cls._coerce_id("Product", product_id)
        try:
            with transaction.atomic():
                product = cls._lock_product(pk)
                data = rules.validate_variant_creation(
                    product,
                    {"size": size, "color": color, "price": price, "stock": stock, "sku": sku},
                )
                variant = Variant(**data)
                cls._save(variant)
        except IntegrityError:
            raise ValidationError("sku", f"SKU {sku!r} is already in use") from None

        logger.info("Added variant %s (%s) to product %s", variant.pk, variant.sku, pk)
        return variant

    @classmethod
    def add_addon(cls, product_id: int, name: str, price: Decimal | int | str) -> "Addon":
        """
        Add an add-on to a product.

        Raises:
            NotFoundError: Product does not exist
            IneligibleCategoryError: Product type does not support add-ons
            ValidationError: Empty name, missing or negative price
        """
        from catalogman.models import Addon

        pk = cls._coerce_id("Product", product_id)
        with transaction.atomic():
            product = cls._lock_product(pk)
            data = rules.validate_addon_creation(
                product,
                product.product_type,
                {"name": name, "price": price},
            )
            addon = Addon(**data)
            cls._save(addon)

        logger.info("Added add-on %s (%s) to product %s", addon.pk, addon.name, pk)
        return addon

    # ======================================================================
    # CONFIGURATION & PRICING
    # ======================================================================

    @classmethod
    def configure(
        cls,
        product_id: int,
        variant_id: int | None,
        addon_ids: Iterable[int] | None = (),
    ) -> Configuration:
        """
        Resolve ids into a Configuration of the product.

        Raises:
            NotFoundError: Product does not exist
            NoVariantSelectedError: variant_id is None
            InvalidVariantError: variant_id is not one of the product's variants
            InvalidAddonError: an addon_id is not one of the product's add-ons
        """
        product = cls.get_product(product_id)

        if variant_id is None:
            raise NoVariantSelectedError(product_id=product.pk)
        variants = {variant.pk: variant for variant in product.variants.all()}
        variant = variants.get(cls._as_int(variant_id))
        if variant is None:
            raise InvalidVariantError(product_id=product.pk, variant_id=variant_id)

        addons = {addon.pk: addon for addon in product.addons.all()}
        selected = []
        for addon_id in addon_ids or ():
            addon = addons.get(cls._as_int(addon_id))
            if addon is None:
                raise InvalidAddonError(product_id=product.pk, addon_id=addon_id)
            selected.append(addon)

        return Configuration(product=product, variant=variant, addons=tuple(selected))

    @classmethod
    def price_configuration(
        cls,
        product_id: int,
        variant_id: int | None,
        addon_ids: Iterable[int] | None = (),
    ) -> Decimal:
        """
        Total price of a variant plus selected add-ons.

        Rounded only when CATALOGMAN["PRICE_QUANTUM"] is set.
        """
        configuration = cls.configure(product_id, variant_id, addon_ids)
        return compute_total(configuration, quantum=catalogman_settings.price_quantum)

    # ======================================================================
    # BROWSING
    # ======================================================================

    @classmethod
    def browse(cls, active_type: str = projection.ALL_TYPES) -> projection.CatalogView:
        """
        Catalog grouped by type and filtered by the active type.

        The filter bar is a convenience: if product types cannot be loaded,
        the view is still returned with only the "All" option.
        """
        products = cls.list_products()
        try:
            product_types = cls.list_product_types()
        except DatabaseError:
            logger.warning("Could not load product types for the filter bar", exc_info=True)
            product_types = []

        grouped = projection.group_by_type(products)
        return projection.CatalogView(
            groups=projection.filter_by_type(grouped, active_type),
            active_type=active_type,
            type_options=projection.type_options(product_types),
        )

    # ======================================================================
    # INTERNALS
    # ======================================================================

    @classmethod
    def _lock_product(cls, product_id: int) -> "Product":
        """Lock the product row for the rest of the transaction."""
        from catalogman.models import Product

        product = Product.objects.select_for_update().filter(pk=product_id).first()
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    @staticmethod
    def _save(instance: Any) -> None:
        """Save a model, surfacing model validation as a catalog ValidationError."""
        try:
            instance.save()
        except DjangoValidationError as exc:
            if hasattr(exc, "error_dict"):
                field, messages = next(iter(exc.message_dict.items()))
                raise ValidationError(field, messages[0]) from exc
            raise ValidationError("__all__", exc.messages[0]) from exc

    @staticmethod
    def _as_int(value: Any) -> int | None:
        # Only whole numbers name a row; 3.9 is not id 3.
        if isinstance(value, bool):
            return None
        if isinstance(value, float) and not value.is_integer():
            return None
        if isinstance(value, Decimal) and (
            not value.is_finite() or value != value.to_integral_value()
        ):
            return None
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            return None

    @classmethod
    def _coerce_id(cls, entity: str, value: Any) -> int:
        pk = cls._as_int(value)
        if pk is None:
            raise NotFoundError(entity, value)
        return pk
