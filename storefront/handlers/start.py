"""Start, menu and dismissal handlers."""

from __future__ import annotations

import logging

from aiogram import Dispatcher, F
from aiogram.filters import Command, CommandStart
from aiogram.types import CallbackQuery, Message

from ..keyboards import BASKET_BUTTON, CATALOG_BUTTON, persistent_menu
from .common import SessionRegistry

logger = logging.getLogger(__name__)


def register_start_handlers(dp: Dispatcher, sessions: SessionRegistry) -> None:
    """Register start, menu and dismissal handlers."""

    @dp.message(CommandStart())
    async def start(m: Message):
        session = sessions.get(m.from_user.id)
        session.controller.show_catalog()
        await m.answer(
            "👋 Добро пожаловать в наш магазин!\n\nИспользуйте кнопки снизу:",
            reply_markup=persistent_menu(session.controller.basket_count),
        )
        await session.flush(m)

    @dp.message(F.text == CATALOG_BUTTON)
    async def text_catalog(m: Message):
        session = sessions.get(m.from_user.id)
        session.controller.show_catalog()
        await session.flush(m)

    @dp.message(F.text.startswith(BASKET_BUTTON))
    async def text_basket(m: Message):
        session = sessions.get(m.from_user.id)
        session.controller.open_basket()
        await session.flush(m)

    @dp.message(Command("cancel"))
    async def cancel(m: Message):
        session = sessions.get(m.from_user.id)
        session.controller.dismiss()
        await m.answer(
            "Отменено.", reply_markup=persistent_menu(session.controller.basket_count)
        )
        await session.flush(m)

    @dp.callback_query(F.data == "modal:close")
    async def close_modal(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        session.controller.dismiss()
        await session.flush(cb.message, edit=True)
        await cb.answer()

    @dp.callback_query(F.data == "noop")
    async def noop(cb: CallbackQuery):
        await cb.answer()
