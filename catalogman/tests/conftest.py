"""Pytest fixtures for Catalogman tests."""

from decimal import Decimal

import pytest

from catalogman.models import Addon, Product, ProductType, Variant


@pytest.fixture
def food(db):
    """Create the add-on capable Food type."""
    return ProductType.objects.create(name="Food", supports_addons=True)


@pytest.fixture
def apparel(db):
    """Create the Apparel type (no add-ons)."""
    return ProductType.objects.create(name="Apparel", supports_addons=False)


@pytest.fixture
def electronics(db):
    """Create the Electronics type (no add-ons)."""
    return ProductType.objects.create(name="Electronics", supports_addons=False)


@pytest.fixture
def burger(db, food):
    """Create a burger product."""
    return Product.objects.create(
        name="Burger",
        description="Grilled beef burger",
        product_type=food,
        images=[],
    )


@pytest.fixture
def pizza(db, food):
    """Create a pizza product."""
    return Product.objects.create(
        name="Pizza",
        description="Stone-baked margherita",
        product_type=food,
        images=["/pizza.jpg"],
    )


@pytest.fixture
def tshirt(db, apparel):
    """Create a t-shirt product."""
    return Product.objects.create(
        name="T-Shirt",
        description="Cotton crew neck",
        product_type=apparel,
        images=["/tshirt.jpg", "/tshirt-back.jpg"],
    )


@pytest.fixture
def regular(db, burger):
    """Create the regular burger variant."""
    return Variant.objects.create(
        product=burger,
        size="Regular",
        price=Decimal("5.00"),
        stock=10,
        sku="BRG-1",
    )


@pytest.fixture
def large(db, burger):
    """Create the large burger variant."""
    return Variant.objects.create(
        product=burger,
        size="Large",
        price=Decimal("7.50"),
        stock=0,
        sku="BRG-2",
    )


@pytest.fixture
def cheese(db, burger):
    """Create a cheese add-on."""
    return Addon.objects.create(product=burger, name="Cheese", price=Decimal("1.00"))


@pytest.fixture
def bacon(db, burger):
    """Create a bacon add-on."""
    return Addon.objects.create(product=burger, name="Bacon", price=Decimal("1.50"))


@pytest.fixture
def tshirt_m(db, tshirt):
    """Create a medium t-shirt variant."""
    return Variant.objects.create(
        product=tshirt,
        size="M",
        color="Blue",
        price=Decimal("19.90"),
        stock=3,
        sku="TSH-M-BLU",
    )
