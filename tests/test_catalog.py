"""Tests for the Catalog snapshot."""

import pytest

from storefront.errors import LoadError
from storefront.services import Catalog


class TestCatalog:
    """Tests for Catalog."""

    @pytest.mark.asyncio
    async def test_load_and_lookup(self, api, product_a):
        catalog = Catalog(api)
        products = await catalog.load()
        assert len(products) == 3
        assert catalog.get("a") == product_a
        assert catalog.get("missing") is None

    @pytest.mark.asyncio
    async def test_get_all_returns_copy(self, api):
        catalog = Catalog(api)
        await catalog.load()
        catalog.get_all().clear()
        assert len(catalog.get_all()) == 3

    @pytest.mark.asyncio
    async def test_load_error_empties_catalog(self, api):
        catalog = Catalog(api)
        await catalog.load()

        api.get_products.side_effect = LoadError("down")
        with pytest.raises(LoadError):
            await catalog.load()

        assert catalog.is_empty
        assert str(catalog.last_error) == "down"

    @pytest.mark.asyncio
    async def test_successful_reload_clears_error(self, api, products):
        api.get_products.side_effect = LoadError("down")
        catalog = Catalog(api)
        with pytest.raises(LoadError):
            await catalog.load()

        api.get_products.side_effect = None
        api.get_products.return_value = products
        await catalog.reload()
        assert catalog.last_error is None
        assert not catalog.is_empty
        assert api.get_products.await_count == 2
