"""Async client for the shop backend."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from .errors import LoadError, SubmissionError
from .models import OrderResult, Product

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


class ShopApiProtocol(Protocol):
    async def get_products(self) -> list[Product]: ...

    async def post_order(self, payload: dict[str, Any]) -> OrderResult: ...


class ShopApi:
    """Thin wrapper over ``GET /product`` and ``POST /order``."""

    def __init__(
        self,
        base_url: str,
        timeout: float | httpx.Timeout | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        if timeout is None:
            self._timeout = DEFAULT_TIMEOUT
        elif isinstance(timeout, httpx.Timeout):
            self._timeout = timeout
        else:
            self._timeout = httpx.Timeout(timeout, connect=10.0)
        self._transport = transport

    async def _request(
        self,
        method: str,
        endpoint: str,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.request(method, url, json=json_data)
            response.raise_for_status()
            return response.json()

    async def get_products(self) -> list[Product]:
        """
        Fetch the full product list.

        Raises:
            LoadError: on transport failure, non-2xx status or a malformed body.
        """
        try:
            data = await self._request("GET", "product")
        except httpx.HTTPStatusError as e:
            logger.error("Shop API error loading products: %s", e)
            raise LoadError(f"Каталог недоступен ({e.response.status_code})") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to load products: %s", e)
            raise LoadError("Каталог недоступен") from e

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise LoadError("Некорректный ответ сервера")

        products = []
        for item in items:
            try:
                products.append(Product.from_api(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Failed to parse product: %s", e)

        logger.debug("get_products: loaded %d items", len(products))
        return products

    async def post_order(self, payload: dict[str, Any]) -> OrderResult:
        """
        Submit an order.

        Raises:
            SubmissionError: on transport failure, non-2xx status or a malformed body.
        """
        try:
            data = await self._request("POST", "order", json_data=payload)
        except httpx.HTTPStatusError as e:
            logger.error("Shop API rejected order: %s", e)
            raise SubmissionError(f"Сервер отклонил заказ ({e.response.status_code})") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Failed to submit order: %s", e)
            raise SubmissionError("Не удалось отправить заказ") from e

        if not isinstance(data, dict):
            raise SubmissionError("Некорректный ответ сервера")
        try:
            return OrderResult.from_api(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Malformed order confirmation %r: %s", data, e)
            raise SubmissionError("Некорректный ответ сервера") from e
