"""Pytest configuration."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from storefront.models import OrderResult, Product


class FakeShopApi:
    """Shop API double with awaitable mocks for both endpoints."""

    def __init__(self, products=None):
        self.get_products = AsyncMock(return_value=list(products or []))
        self.post_order = AsyncMock(return_value=OrderResult(id="order-1", total=0))


class FakeScheduler:
    """Records scheduled callbacks instead of running them on a loop."""

    def __init__(self):
        self.calls = []

    def __call__(self, delay, callback, *args):
        self.calls.append((delay, callback, args))

    def fire_all(self):
        calls, self.calls = self.calls, []
        for _, callback, args in calls:
            callback(*args)


@pytest.fixture
def product_a():
    return Product(
        id="a",
        title="+1 час в сутках",
        description="Если планировали решить все задачи в течение дня",
        image="/Asterisk_2.svg",
        category="софт-скил",
        price=500,
    )


@pytest.fixture
def product_b():
    return Product(
        id="b",
        title="Бэкенд-антистресс",
        description="Эта кнопка нужна, чтобы усилить хаос",
        image="/Butterfly.svg",
        category="другое",
        price=None,
    )


@pytest.fixture
def product_c():
    return Product(
        id="c",
        title="Фреймворк куки судьбы",
        description="",
        image="https://cdn.example.com/Soft_Flower.svg",
        category="дополнительное",
        price=250,
    )


@pytest.fixture
def products(product_a, product_b, product_c):
    return [product_a, product_b, product_c]


@pytest.fixture
def api(products):
    return FakeShopApi(products)


@pytest.fixture
def scheduler():
    return FakeScheduler()
