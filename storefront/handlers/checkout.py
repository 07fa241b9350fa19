"""Two-step checkout handlers: address and payment, then contacts."""

from __future__ import annotations

import asyncio
import logging

from aiogram import Dispatcher, F
from aiogram.types import CallbackQuery, Message

from ..keyboards import persistent_menu
from ..models import OrderAddressScreen, OrderContactsScreen
from .common import SessionRegistry, split_contacts

logger = logging.getLogger(__name__)


def register_checkout_handlers(dp: Dispatcher, sessions: SessionRegistry) -> None:
    """Register checkout handlers. The free-text handler must be registered last."""

    @dp.callback_query(F.data == "checkout:start")
    async def checkout_start(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        if not session.controller.checkout():
            await cb.answer("Корзина пустая")
            return
        await session.flush(cb.message, edit=True)
        await cb.answer()

    @dp.callback_query(F.data.startswith("order:payment:"))
    async def choose_payment(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        token = cb.data.split(":", 2)[2]
        if session.controller.set_payment(token):
            await session.flush(cb.message, edit=True)
        await cb.answer()

    @dp.callback_query(F.data == "order:next")
    async def order_next(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        session.controller.next()
        await session.flush(cb.message, edit=True)
        await cb.answer()

    @dp.callback_query(F.data == "order:pay")
    async def order_pay(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        controller = session.controller
        if controller.submission_pending:
            await cb.answer("Заказ уже отправляется…")
            return
        await cb.answer()

        pay = asyncio.create_task(controller.pay())
        # Let pay() reach the network call so the disabled control is shown
        await asyncio.sleep(0)
        if controller.submission_pending:
            await session.flush(cb.message, edit=True)
        accepted = await pay
        await session.flush(session.message or cb.message, edit=True)
        if accepted:
            session.pop_basket_changed()
            await cb.message.answer(
                "Спасибо за покупку!", reply_markup=persistent_menu(controller.basket_count)
            )

    @dp.callback_query(F.data == "success:close")
    async def success_close(cb: CallbackQuery):
        session = sessions.get(cb.from_user.id)
        session.controller.close()
        await session.flush(cb.message, edit=True)
        await cb.answer()

    @dp.message(F.text)
    async def form_input(m: Message):
        session = sessions.get(m.from_user.id)
        controller = session.controller
        screen = controller.screen
        text = (m.text or "").strip()

        if isinstance(screen, OrderAddressScreen):
            controller.set_address(text)
        elif isinstance(screen, OrderContactsScreen):
            for field, value in split_contacts(text):
                if field == "email":
                    controller.set_email(value)
                else:
                    controller.set_phone(value)
        else:
            await m.answer("Используйте кнопки меню. /start — начать заново.")
            return
        await session.flush(m)
