"""
Shared fixtures for the data layer tests.
"""

import pytest

from datalayer import DataLayer, StaticEnvironment


SITE_INFO = {
    "name": "s",
    "experience": "desktop",
    "currency": "AUD",
    "division": "d",
    "domain": "x.com",
    "env": "prod",
    "version": "1.0",
}


def make_product(**overrides):
    """Raw product input that passes validation."""
    product = {
        "brand": "Nike",
        "category": ["Run"],
        "child_sku": "c1",
        "color": "Red",
        "full_price": 100,
        "listed_price": 80,
        "gender": "Men",
        "name": "Air X",
        "parent_category": "Footwear",
        "parent_sku": "p1",
        "sku_available": True,
    }
    product.update(overrides)
    return product


def make_cart_item(**overrides):
    """Raw cart item input that passes validation."""
    item = make_product(qty=1, size="US 9", sku_by_size="c1-9")
    item.update(overrides)
    return item


@pytest.fixture
def site_info():
    return dict(SITE_INFO)


@pytest.fixture
def environment():
    return StaticEnvironment(
        path_value="/mens/running/",
        url_value="https://x.com/mens/running/",
        title_value="Mens Running | X",
    )


@pytest.fixture
def data_layer(environment, site_info):
    """Initialised DataLayer over an in-memory queue."""
    dl = DataLayer(environment)
    dl.init({"siteInfo": site_info})
    return dl
