"""Reusable catalog fixtures."""

import pytest

from qlm.service.catalog import Catalog
from qlm.service.schemas.items import CatalogItem


@pytest.fixture
def catalog() -> Catalog:
    """150 items titled "title 1".."title 150"."""
    return Catalog.demo(150)


@pytest.fixture
def small_catalog() -> Catalog:
    """12 items, for running the service dry."""
    return Catalog(CatalogItem(id=i, title=f"title {i}") for i in range(1, 13))
