"""Tests for Catalogman service (CatalogService API)."""

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from catalogman.exceptions import (
    CatalogError,
    IneligibleCategoryError,
    InvalidAddonError,
    InvalidVariantError,
    NoVariantSelectedError,
    NotFoundError,
    ValidationError,
)
from catalogman.models import Addon, Product, ProductType, Variant
from catalogman.service import CatalogService
from catalogman.signals import product_deleted


pytestmark = pytest.mark.django_db


class TestProductTypes:
    """Tests for create_product_type() and list_product_types()."""

    def test_create(self, db):
        product_type = CatalogService.create_product_type("Apparel")
        assert product_type.pk is not None
        assert product_type.name == "Apparel"
        assert product_type.supports_addons is False

    @pytest.mark.parametrize("name", ["Food", "food", "FOOD"])
    def test_food_gets_addons_by_default(self, db, name):
        assert CatalogService.create_product_type(name).supports_addons is True

    def test_configured_addon_types(self, db, settings):
        settings.CATALOGMAN = {"ADDON_TYPE_NAMES": ["food", "drinks"]}
        assert CatalogService.create_product_type("Drinks").supports_addons is True

    def test_explicit_capability(self, db):
        assert CatalogService.create_product_type("Desserts", supports_addons=True).supports_addons is True
        assert CatalogService.create_product_type("Food", supports_addons=False).supports_addons is False

    def test_empty_name(self, db):
        with pytest.raises(ValidationError) as exc:
            CatalogService.create_product_type("")
        assert exc.value.field == "name"

    def test_duplicate_name(self, food):
        with pytest.raises(ValidationError) as exc:
            CatalogService.create_product_type("Food")
        assert exc.value.field == "name"
        assert ProductType.objects.filter(name="Food").count() == 1

    def test_names_are_case_sensitive(self, food):
        assert CatalogService.create_product_type("FOOD").pk != food.pk

    def test_list(self, food, apparel):
        assert CatalogService.list_product_types() == [food, apparel]


class TestCreateProduct:
    """Tests for create_product()."""

    def test_create(self, food):
        product = CatalogService.create_product("Burger", "Grilled beef", food.pk, [])
        assert product.pk is not None
        assert product.product_type == food
        assert product.images == []

    def test_images_kept_in_order(self, apparel):
        product = CatalogService.create_product("Shirt", "Cotton", apparel.pk, ["/b.jpg", "/a.jpg"])
        assert Product.objects.get(pk=product.pk).images == ["/b.jpg", "/a.jpg"]

    def test_unknown_type(self, db):
        with pytest.raises(NotFoundError) as exc:
            CatalogService.create_product("Burger", "Grilled beef", 999, [])
        assert exc.value.data == {"entity": "ProductType", "id": 999}
        assert not Product.objects.exists()

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"name": ""}, "name"),
            ({"description": ""}, "description"),
            ({"images": None}, "images"),
            ({"images": "/burger.jpg"}, "images"),
        ],
    )
    def test_invalid(self, food, kwargs, field):
        params = {"name": "Burger", "description": "Grilled beef", "product_type_id": food.pk, "images": []}
        params.update(kwargs)
        with pytest.raises(ValidationError) as exc:
            CatalogService.create_product(**params)
        assert exc.value.field == field
        assert not Product.objects.exists()

    def test_missing_type_id(self, db):
        with pytest.raises(ValidationError) as exc:
            CatalogService.create_product("Burger", "Grilled beef", None, [])
        assert exc.value.field == "product_type_id"


class TestReadProducts:
    """Tests for list_products(), get_product() and list_products_by_type()."""

    def test_list_enriched(self, burger, tshirt, regular, cheese, django_assert_num_queries):
        with django_assert_num_queries(3):
            products = CatalogService.list_products()
            assert [p.name for p in products] == ["Burger", "T-Shirt"]
            assert products[0].product_type.name == "Food"
            assert list(products[0].variants.all()) == [regular]
            assert list(products[0].addons.all()) == [cheese]
            assert list(products[1].addons.all()) == []

    def test_list_idempotent(self, burger, tshirt, regular, cheese):
        first = CatalogService.list_products()
        second = CatalogService.list_products()
        assert first == second
        assert [list(p.variants.all()) for p in first] == [list(p.variants.all()) for p in second]

    def test_get(self, burger, regular):
        product = CatalogService.get_product(burger.pk)
        assert product == burger
        assert list(product.variants.all()) == [regular]

    def test_get_string_id(self, burger):
        assert CatalogService.get_product(str(burger.pk)) == burger

    @pytest.mark.parametrize("product_id", [999, "abc", None])
    def test_get_missing(self, db, product_id):
        with pytest.raises(NotFoundError) as exc:
            CatalogService.get_product(product_id)
        assert exc.value.code == "NOT_FOUND"

    @pytest.mark.parametrize(
        "make_id",
        [
            lambda pk: pk + 0.9,
            lambda pk: Decimal(f"{pk}.5"),
            lambda pk: Decimal("NaN"),
            lambda pk: float("inf"),
        ],
        ids=["float", "decimal", "nan", "inf"],
    )
    def test_get_fractional_id(self, burger, make_id):
        with pytest.raises(NotFoundError):
            CatalogService.get_product(make_id(burger.pk))

    def test_get_whole_number_types(self, burger):
        assert CatalogService.get_product(float(burger.pk)) == burger
        assert CatalogService.get_product(Decimal(burger.pk)) == burger

    def test_by_type(self, burger, pizza, tshirt):
        assert CatalogService.list_products_by_type("Food") == [burger, pizza]
        assert CatalogService.list_products_by_type("Apparel") == [tshirt]

    def test_by_type_exact_match(self, burger):
        assert CatalogService.list_products_by_type("food") == []
        assert CatalogService.list_products_by_type("Electronics") == []


class TestDeleteProduct:
    """Tests for delete_product()."""

    def test_delete_cascades(self, burger, regular, cheese):
        deleted = CatalogService.delete_product(burger.pk)
        assert deleted.name == "Burger"
        assert deleted.pk is None
        assert not Product.objects.exists()
        assert not Variant.objects.exists()
        assert not Addon.objects.exists()

    def test_delete_signal(self, burger):
        received = []

        def handler(sender, instance, product_id, **kwargs):
            received.append(product_id)

        product_deleted.connect(handler)
        try:
            CatalogService.delete_product(burger.pk)
        finally:
            product_deleted.disconnect(handler)
        assert received == [burger.pk]

    def test_delete_missing(self, db):
        with pytest.raises(NotFoundError):
            CatalogService.delete_product(999)

    def test_delete_twice(self, burger):
        pk = burger.pk
        CatalogService.delete_product(pk)
        with pytest.raises(NotFoundError):
            CatalogService.delete_product(pk)

    def test_type_survives(self, burger, food):
        CatalogService.delete_product(burger.pk)
        assert ProductType.objects.filter(pk=food.pk).exists()


class TestAddVariant:
    """Tests for add_variant()."""

    def test_add(self, burger):
        variant = CatalogService.add_variant(burger.pk, price="5.00", stock=10, sku="BRG-1", size="Regular")
        assert variant.product_id == burger.pk
        assert variant.price == Decimal("5.00")
        assert variant.color is None

    def test_add_to_non_food(self, tshirt):
        variant = CatalogService.add_variant(tshirt.pk, price=19.9, stock=3, sku="TSH-1", size="M", color="Blue")
        assert Variant.objects.get(pk=variant.pk).price == Decimal("19.90")

    def test_missing_product(self, db):
        with pytest.raises(NotFoundError) as exc:
            CatalogService.add_variant(999, price="5", stock=1, sku="X")
        assert exc.value.data["entity"] == "Product"

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"sku": ""}, "sku"),
            ({"price": None}, "price"),
            ({"price": "-1"}, "price"),
            ({"stock": None}, "stock"),
            ({"stock": -5}, "stock"),
        ],
    )
    def test_invalid(self, burger, kwargs, field):
        params = {"price": "5.00", "stock": 10, "sku": "BRG-1"}
        params.update(kwargs)
        with pytest.raises(ValidationError) as exc:
            CatalogService.add_variant(burger.pk, **params)
        assert exc.value.field == field
        assert not Variant.objects.exists()

    def test_too_many_decimals(self, burger):
        with pytest.raises(ValidationError) as exc:
            CatalogService.add_variant(burger.pk, price="5.001", stock=1, sku="BRG-1")
        assert exc.value.field == "price"

    def test_duplicate_sku(self, burger, tshirt, regular):
        with pytest.raises(ValidationError) as exc:
            CatalogService.add_variant(tshirt.pk, price="1", stock=1, sku="BRG-1")
        assert exc.value.field == "sku"
        assert Variant.objects.count() == 1


class TestAddAddon:
    """Tests for add_addon()."""

    def test_add_to_food(self, burger):
        addon = CatalogService.add_addon(burger.pk, "Cheese", "1.00")
        assert addon.product_id == burger.pk
        assert addon.price == Decimal("1.00")

    @pytest.mark.parametrize("type_name", ["food", "FOOD", "Food"])
    def test_any_food_casing(self, db, type_name):
        product_type = CatalogService.create_product_type(type_name)
        product = CatalogService.create_product("Wrap", "Chicken wrap", product_type.pk, [])
        addon = CatalogService.add_addon(product.pk, "Sauce", "0.50")
        assert addon.product_id == product.pk

    @pytest.mark.parametrize("type_name", ["Apparel", "Electronics", "Foods"])
    def test_non_food_always_rejected(self, db, type_name):
        product_type = CatalogService.create_product_type(type_name)
        product = CatalogService.create_product("Item", "Thing", product_type.pk, [])
        for name, price in [("Gift wrap", "2.00"), ("", "-1")]:
            with pytest.raises(IneligibleCategoryError) as exc:
                CatalogService.add_addon(product.pk, name, price)
            assert exc.value.data == {"product_id": product.pk, "product_type": type_name}
        assert not Addon.objects.exists()

    def test_missing_product(self, db):
        with pytest.raises(NotFoundError):
            CatalogService.add_addon(999, "Cheese", "1.00")

    @pytest.mark.parametrize("name, price, field", [("", "1", "name"), ("Cheese", None, "price"), ("Cheese", "-1", "price")])
    def test_invalid(self, burger, name, price, field):
        with pytest.raises(ValidationError) as exc:
            CatalogService.add_addon(burger.pk, name, price)
        assert exc.value.field == field
        assert not Addon.objects.exists()

    def test_errors_distinguishable(self, burger, tshirt):
        """Rule violations are not generic validation failures."""
        with pytest.raises(CatalogError) as exc:
            CatalogService.add_addon(tshirt.pk, "Print", "2")
        assert not isinstance(exc.value, ValidationError)
        assert exc.value.as_dict()["code"] == "INELIGIBLE_CATEGORY"


class TestPriceConfiguration:
    """Tests for configure() and price_configuration()."""

    def test_variant_and_addon(self, burger, regular, cheese):
        assert CatalogService.price_configuration(burger.pk, regular.pk, [cheese.pk]) == Decimal("6.00")

    def test_no_addons_equals_variant_price(self, burger, regular, large):
        assert CatalogService.price_configuration(burger.pk, regular.pk, []) == Decimal("5.00")
        assert CatalogService.price_configuration(burger.pk, large.pk) == Decimal("7.50")

    def test_none_addons_means_no_addons(self, burger, regular):
        assert CatalogService.price_configuration(burger.pk, regular.pk, None) == Decimal("5.00")
        assert CatalogService.configure(burger.pk, regular.pk, None).addons == ()

    def test_fractional_variant_id(self, burger, regular, cheese):
        with pytest.raises(InvalidVariantError):
            CatalogService.price_configuration(burger.pk, regular.pk + 0.7, [cheese.pk])

    def test_fractional_addon_id(self, burger, regular, cheese):
        with pytest.raises(InvalidAddonError):
            CatalogService.price_configuration(burger.pk, regular.pk, [Decimal(f"{cheese.pk}.2")])

    def test_addon_order(self, burger, regular, cheese, bacon):
        forward = CatalogService.price_configuration(burger.pk, regular.pk, [cheese.pk, bacon.pk])
        backward = CatalogService.price_configuration(burger.pk, regular.pk, [bacon.pk, cheese.pk])
        assert forward == backward == Decimal("7.50")

    def test_no_variant(self, burger, cheese):
        with pytest.raises(NoVariantSelectedError):
            CatalogService.price_configuration(burger.pk, None, [cheese.pk])

    def test_variant_of_other_product(self, burger, tshirt_m):
        with pytest.raises(InvalidVariantError) as exc:
            CatalogService.price_configuration(burger.pk, tshirt_m.pk)
        assert exc.value.data["variant_id"] == tshirt_m.pk

    def test_addon_of_other_product(self, burger, pizza, regular):
        olives = Addon.objects.create(product=pizza, name="Olives", price=Decimal("0.50"))
        with pytest.raises(InvalidAddonError) as exc:
            CatalogService.price_configuration(burger.pk, regular.pk, [olives.pk])
        assert exc.value.data == {"product_id": burger.pk, "addon_id": olives.pk}

    def test_unknown_addon(self, burger, regular):
        with pytest.raises(InvalidAddonError):
            CatalogService.price_configuration(burger.pk, regular.pk, [12345])

    def test_addons_on_non_food(self, tshirt, tshirt_m, cheese):
        with pytest.raises(InvalidAddonError):
            CatalogService.price_configuration(tshirt.pk, tshirt_m.pk, [cheese.pk])
        assert CatalogService.price_configuration(tshirt.pk, tshirt_m.pk, []) == Decimal("19.90")

    def test_unknown_product(self, db):
        with pytest.raises(NotFoundError):
            CatalogService.price_configuration(999, 1, [])

    def test_configured_rounding(self, burger, regular, cheese, settings):
        settings.CATALOGMAN = {"PRICE_QUANTUM": "1"}
        assert str(CatalogService.price_configuration(burger.pk, regular.pk, [cheese.pk])) == "6"

    def test_configure(self, burger, regular, cheese):
        configuration = CatalogService.configure(burger.pk, regular.pk, [cheese.pk, cheese.pk])
        assert configuration.product == burger
        assert configuration.variant == regular
        assert configuration.addons == (cheese,)


class TestBrowse:
    """Tests for browse()."""

    def test_grouped(self, burger, tshirt, pizza, food, apparel):
        view = CatalogService.browse()
        assert view.groups == {"Food": [burger, pizza], "Apparel": [tshirt]}
        assert view.active_type == "All"
        assert view.type_options == ["All", "Food", "Apparel"]

    def test_filtered(self, burger, tshirt, food, apparel, electronics):
        view = CatalogService.browse("Apparel")
        assert view.groups == {"Apparel": [tshirt]}
        assert view.type_options == ["All", "Food", "Apparel", "Electronics"]

    def test_type_fetch_failure_degrades(self, burger, tshirt, caplog):
        with patch.object(CatalogService, "list_product_types", side_effect=DatabaseError("boom")):
            view = CatalogService.browse()
        assert view.groups == {"Food": [burger], "Apparel": [tshirt]}
        assert view.type_options == ["All"]
        assert "Could not load product types" in caplog.text

    def test_product_fetch_failure_propagates(self, db):
        with patch.object(CatalogService, "list_products", side_effect=DatabaseError("boom")):
            with pytest.raises(DatabaseError):
                CatalogService.browse()


class TestEndToEnd:
    """Burger with cheese, and the Apparel rejection."""

    def test_burger_with_cheese(self, db):
        food = CatalogService.create_product_type("Food")
        burger = CatalogService.create_product("Burger", "Grilled beef burger", food.pk, images=[])
        variant = CatalogService.add_variant(burger.pk, size="Regular", price=5.00, stock=10, sku="BRG-1")
        cheese = CatalogService.add_addon(burger.pk, name="Cheese", price=1.00)

        total = CatalogService.price_configuration(burger.pk, variant.pk, [cheese.pk])
        assert total == Decimal("6.00")

    def test_apparel_rejects_addons(self, db):
        apparel = CatalogService.create_product_type("Apparel")
        shirt = CatalogService.create_product("T-Shirt", "Cotton crew neck", apparel.pk, images=[])
        CatalogService.add_variant(shirt.pk, size="M", price=19.90, stock=5, sku="TSH-M")

        with pytest.raises(IneligibleCategoryError):
            CatalogService.add_addon(shirt.pk, name="Gift wrap", price=2.00)
