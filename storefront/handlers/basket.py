"""Basket and product toggle handlers."""

from __future__ import annotations

import logging

from aiogram import Dispatcher, F
from aiogram.types import CallbackQuery

from .common import Session, SessionRegistry

logger = logging.getLogger(__name__)


def _count_notice(session: Session) -> str | None:
    if not session.pop_basket_changed():
        return None
    return f"🧺 В корзине: {session.controller.basket_count} шт."


def register_basket_handlers(dp: Dispatcher, sessions: SessionRegistry) -> None:
    """Register basket handlers."""

    @dp.callback_query(F.data == "basket:show")
    async def show_basket(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        session.controller.open_basket()
        await session.flush(cb.message, edit=True)
        await cb.answer()

    @dp.callback_query(F.data == "basket:toggle")
    async def toggle(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        if not session.controller.toggle_basket():
            await cb.answer("Товар недоступен для покупки")
            return
        await session.flush(cb.message, edit=True)
        await cb.answer(_count_notice(session))

    @dp.callback_query(F.data == "basket:remove")
    async def remove_confirm(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        if not session.controller.confirm_remove():
            await cb.answer()
            return
        await session.flush(cb.message, edit=True)
        await cb.answer(_count_notice(session))

    @dp.callback_query(F.data.startswith("basket:del:"))
    async def remove_item(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        product_id = cb.data.split(":", 2)[2]
        if not session.controller.remove_from_basket(product_id):
            await cb.answer()
            return
        await session.flush(cb.message, edit=True)
        await cb.answer(_count_notice(session))
