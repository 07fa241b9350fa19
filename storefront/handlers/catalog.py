"""Catalog and product detail handlers."""

from __future__ import annotations

import logging

from aiogram import Dispatcher, F
from aiogram.types import CallbackQuery

from .common import SessionRegistry

logger = logging.getLogger(__name__)


def register_catalog_handlers(dp: Dispatcher, sessions: SessionRegistry) -> None:
    """Register catalog handlers."""

    @dp.callback_query(F.data == "catalog:show")
    async def catalog(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        session.controller.show_catalog()
        await session.flush(cb.message, edit=True)
        await cb.answer()

    @dp.callback_query(F.data == "catalog:reload")
    async def reload(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        ok = await session.controller.reload_catalog()
        await session.flush(cb.message, edit=True)
        await cb.answer("Каталог обновлён" if ok else "Не удалось загрузить каталог")

    @dp.callback_query(F.data.startswith("product:"))
    async def product(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        product_id = cb.data.split(":", 1)[1]
        if not session.controller.open_product(product_id):
            await cb.answer("Товар не найден", show_alert=True)
            return
        await session.flush(cb.message, edit=True)
        await cb.answer()
