from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

# Closed set of payment tokens accepted by the backend
PAYMENT_ONLINE = "online"
PAYMENT_CASH = "cash"
PAYMENT_METHODS = (PAYMENT_ONLINE, PAYMENT_CASH)

PAYMENT_LABELS = {
    PAYMENT_ONLINE: "Онлайн",
    PAYMENT_CASH: "При получении",
}


@dataclass(frozen=True)
class Product:
    id: str
    title: str
    description: str
    image: str
    category: str
    price: int | None  # None: not for sale

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Product:
        price = data.get("price")
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            image=data.get("image", ""),
            category=data.get("category", ""),
            price=int(price) if price is not None else None,
        )

    @property
    def is_available(self) -> bool:
        return self.price is not None


@dataclass(frozen=True)
class OrderResult:
    id: str
    total: int

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> OrderResult:
        return cls(id=str(data.get("id", "")), total=int(data.get("total", 0)))


# ---------------------------------------------------------------------------
# Screens
# ---------------------------------------------------------------------------

SUCCESS_ORDERED = "ordered"
SUCCESS_REMOVED = "removed"


@dataclass(frozen=True)
class CatalogScreen:
    pass


@dataclass(frozen=True)
class ProductDetailScreen:
    product: Product


@dataclass(frozen=True)
class BasketScreen:
    pass


@dataclass(frozen=True)
class OrderAddressScreen:
    pass


@dataclass(frozen=True)
class OrderContactsScreen:
    pass


@dataclass(frozen=True)
class SuccessScreen:
    message: str
    total: int = 0
    kind: str = SUCCESS_ORDERED


Screen = Union[
    CatalogScreen,
    ProductDetailScreen,
    BasketScreen,
    OrderAddressScreen,
    OrderContactsScreen,
    SuccessScreen,
]
