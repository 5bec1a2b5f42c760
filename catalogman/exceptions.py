"""Catalogman exceptions."""

from typing import Any


ERROR_MESSAGES = {
    "VALIDATION_ERROR": "Invalid input",
    "NOT_FOUND": "Record not found",
    "INELIGIBLE_CATEGORY": "Add-ons are not allowed for this product type",
    "NO_VARIANT_SELECTED": "A variant must be selected",
    "INVALID_VARIANT": "Variant does not belong to product",
    "INVALID_ADDON": "Add-on is not available for this product",
}


class CatalogError(Exception):
    """
    Structured exception for catalog operations.

    Usage:
        try:
            addon = CatalogService.add_addon(product_id, "Cheese", "1.00")
        except CatalogError as e:
            if e.code == "INELIGIBLE_CATEGORY":
                print(f"{e.data['product_type']} products take no add-ons")
    """

    default_code = "CATALOG_ERROR"

    def __init__(self, code: str | None = None, message: str = "", **data: Any) -> None:
        self.code = code or self.default_code
        self.message = message or ERROR_MESSAGES.get(self.code, self.code)
        self.data = data
        super().__init__(f"[{self.code}] {self.message}")

    def as_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "data": self.data,
        }


class ValidationError(CatalogError):
    """Missing, malformed or out-of-range input field."""

    default_code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str = "", **data: Any) -> None:
        super().__init__(message=message, field=field, **data)

    @property
    def field(self) -> str:
        return self.data["field"]


class NotFoundError(CatalogError):
    """Referenced id does not exist."""

    default_code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: Any, message: str = "") -> None:
        super().__init__(
            message=message or f"{entity} {entity_id!r} not found",
            entity=entity,
            id=entity_id,
        )


class IneligibleCategoryError(CatalogError):
    """Add-on attempted on a product whose type does not support add-ons."""

    default_code = "INELIGIBLE_CATEGORY"


class NoVariantSelectedError(CatalogError):
    """Configuration priced without a selected variant."""

    default_code = "NO_VARIANT_SELECTED"


class InvalidVariantError(NoVariantSelectedError):
    """Selected variant belongs to another product."""

    default_code = "INVALID_VARIANT"


class InvalidAddonError(CatalogError):
    """Selected add-on is not one of the product's add-ons."""

    default_code = "INVALID_ADDON"
