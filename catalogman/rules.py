"""
Eligibility and validation rules.

Pure functions that gate every catalog mutation. They never touch the
database: callers fetch the product/type first and pass them in.

    can_have_addons(product)                   - Add-on capability of the product's type
    validate_product_type_creation(payload)    - Clean a ProductType payload
    validate_product_creation(payload)         - Clean a Product payload
    validate_variant_creation(product, payload)
    validate_addon_creation(product, product_type, payload)

Every validator returns the cleaned payload or raises ValidationError
(IneligibleCategoryError for add-ons on types without the capability).
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from catalogman.exceptions import IneligibleCategoryError, ValidationError

if TYPE_CHECKING:
    from catalogman.models import Product, ProductType


def can_have_addons(product: "Product", product_type: "ProductType | None" = None) -> bool:
    """True iff the product's type carries the add-on capability."""
    product_type = product_type or product.product_type
    return bool(product_type.supports_addons)


def supports_addons_by_default(name: str, eligible_names: Iterable[str]) -> bool:
    """Initial add-on capability for a new type, matched case-insensitively by name."""
    folded = name.strip().casefold()
    return any(folded == eligible.casefold() for eligible in eligible_names)


# ======================================================================
# Payload validators
# ======================================================================


def validate_product_type_creation(payload: Mapping[str, Any]) -> dict:
    name = _required_str(payload, "name")
    supports_addons = payload.get("supports_addons")
    if supports_addons is not None and not isinstance(supports_addons, bool):
        raise ValidationError("supports_addons", "supports_addons must be a boolean")
    return {"name": name, "supports_addons": supports_addons}


def validate_product_creation(payload: Mapping[str, Any]) -> dict:
    """
    Clean a product payload.

    name, description and product_type_id are required; images must be
    present and be a list (possibly empty) of strings.
    """
    name = _required_str(payload, "name")
    description = _required_str(payload, "description")
    product_type_id = _required_id(payload, "product_type_id")

    images = payload.get("images")
    if isinstance(images, str) or not isinstance(images, (list, tuple)):
        raise ValidationError("images", "images must be a list")
    if not all(isinstance(image, str) for image in images):
        raise ValidationError("images", "every image must be a string")

    return {
        "name": name,
        "description": description,
        "product_type_id": product_type_id,
        "images": list(images),
    }


def validate_variant_creation(product: "Product", payload: Mapping[str, Any]) -> dict:
    sku = _required_str(payload, "sku")
    price = _non_negative_decimal(payload, "price")
    stock = _non_negative_int(payload, "stock")
    return {
        "product": product,
        "size": _optional_str(payload, "size"),
        "color": _optional_str(payload, "color"),
        "price": price,
        "stock": stock,
        "sku": sku,
    }


def validate_addon_creation(
    product: "Product",
    product_type: "ProductType",
    payload: Mapping[str, Any],
) -> dict:
    """
    Clean an add-on payload.

    Eligibility is checked before the payload, so a product whose type has
    no add-on capability is rejected even when the payload is valid.
    """
    if not can_have_addons(product, product_type):
        raise IneligibleCategoryError(
            message=f"Add-ons are not allowed for {product_type.name} products",
            product_id=product.pk,
            product_type=product_type.name,
        )
    return {
        "product": product,
        "name": _required_str(payload, "name"),
        "price": _non_negative_decimal(payload, "price"),
    }


# ======================================================================
# Field helpers
# ======================================================================


def _required_str(payload: Mapping[str, Any], field: str) -> str:
    value = payload.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, f"{field} is required")
    return value.strip()


def _optional_str(payload: Mapping[str, Any], field: str) -> str | None:
    value = payload.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(field, f"{field} must be a string")
    return value.strip() or None


def _required_id(payload: Mapping[str, Any], field: str) -> int:
    value = payload.get(field)
    if value is None or value == "":
        raise ValidationError(field, f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be an integer id")
    try:
        pk = int(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"{field} must be an integer id") from None
    if isinstance(value, float) and value != pk:
        raise ValidationError(field, f"{field} must be an integer id")
    if pk <= 0:
        raise ValidationError(field, f"{field} must be a positive id")
    return pk


def _non_negative_decimal(payload: Mapping[str, Any], field: str) -> Decimal:
    value = payload.get(field)
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(field, f"{field} is required")
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(field, f"{field} must be a number") from None
    if not amount.is_finite():
        raise ValidationError(field, f"{field} must be a finite number")
    if amount < 0:
        raise ValidationError(field, f"{field} must not be negative")
    return amount


def _non_negative_int(payload: Mapping[str, Any], field: str) -> int:
    value = payload.get(field)
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(field, f"{field} is required")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(field, f"{field} must be a whole number")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(field, f"{field} must be a whole number") from None
    if number < 0:
        raise ValidationError(field, f"{field} must not be negative")
    return number
