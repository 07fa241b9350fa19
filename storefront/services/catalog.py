"""Read-only product snapshot loaded from the shop API."""

from __future__ import annotations

import logging

from ..api import ShopApiProtocol
from ..errors import LoadError
from ..models import Product

logger = logging.getLogger(__name__)


class Catalog:
    """Products fetched once per session, looked up by id."""

    def __init__(self, api: ShopApiProtocol):
        self._api = api
        self._products: list[Product] = []
        self._by_id: dict[str, Product] = {}
        self.last_error: LoadError | None = None

    async def load(self) -> list[Product]:
        """
        Replace the snapshot with a fresh product list.
        On LoadError the catalog is left empty and the error is re-raised.
        """
        try:
            products = await self._api.get_products()
        except LoadError as e:
            self._set([])
            self.last_error = e
            raise
        self._set(products)
        self.last_error = None
        logger.info("Catalog loaded: %d products", len(products))
        return self.get_all()

    async def reload(self) -> list[Product]:
        logger.info("Reloading catalog")
        return await self.load()

    def _set(self, products: list[Product]) -> None:
        self._products = list(products)
        self._by_id = {p.id: p for p in self._products}

    def get_all(self) -> list[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Product | None:
        return self._by_id.get(product_id)

    @property
    def is_empty(self) -> bool:
        return not self._products
