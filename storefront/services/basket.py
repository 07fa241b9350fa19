"""In-memory basket: ordered, unique by product id."""

from __future__ import annotations

import logging

from ..models import Product

logger = logging.getLogger(__name__)


class BasketStore:
    """Products the user intends to buy, in insertion order."""

    def __init__(self) -> None:
        self._items: dict[str, Product] = {}

    def add(self, product: Product) -> bool:
        """Append the product unless it is already present or has no price.

        Returns True when the basket changed.
        """
        if not product.is_available:
            logger.debug("basket_add_unavailable", extra={"product_id": product.id})
            return False
        if product.id in self._items:
            return False
        self._items[product.id] = product
        return True

    def remove(self, product_id: str) -> bool:
        return self._items.pop(product_id, None) is not None

    def has(self, product_id: str) -> bool:
        return product_id in self._items

    def get_all(self) -> list[Product]:
        return list(self._items.values())

    def get_total(self) -> int:
        return sum(p.price for p in self._items.values() if p.price is not None)

    def clear(self) -> None:
        self._items.clear()

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._items
