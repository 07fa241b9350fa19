"""Per-chat sessions and the message-backed modal surface."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from aiogram.types import Message

from ..api import ShopApiProtocol
from ..config import Settings
from ..controller import ScreenController
from ..services import BasketStore, Catalog, OrderDraft
from ..views import Rendered, StorefrontViews

logger = logging.getLogger(__name__)


class ChatSurface:
    """
    Holds what the chat should currently display.

    The catalog page sits underneath a single modal; the handler flushes
    whichever one is visible after each intent.
    """

    def __init__(self) -> None:
        self.page: Rendered | None = None
        self.content: Rendered | None = None
        self.is_open = False

    def open(self, content: Rendered) -> None:
        self.content = content
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def clear_content(self) -> None:
        self.content = None

    def set_page(self, content: Rendered) -> None:
        self.page = content

    def current(self) -> Rendered | None:
        if self.is_open and self.content is not None:
            return self.content
        return self.page


async def show(message: Message, content: Rendered, edit: bool = False) -> Message | None:
    """
    Display rendered content. With ``edit`` the bot message is replaced in place;
    photo content always goes out as a fresh message.
    """
    if content.photo:
        if edit:
            try:
                await message.delete()
            except Exception:
                pass
        try:
            return await message.answer_photo(
                content.photo,
                caption=content.text,
                parse_mode="HTML",
                reply_markup=content.keyboard,
            )
        except Exception as e:
            logger.warning("Failed to send photo %s: %s", content.photo, e)
            return await message.answer(content.text, parse_mode="HTML", reply_markup=content.keyboard)

    if edit:
        try:
            await message.edit_text(content.text, parse_mode="HTML", reply_markup=content.keyboard)
            return message
        except Exception:
            # Photo messages cannot become text; replace them
            try:
                await message.delete()
            except Exception:
                pass
    return await message.answer(content.text, parse_mode="HTML", reply_markup=content.keyboard)


class Session:
    """One chat's basket, order draft and screen controller."""

    def __init__(
        self,
        catalog: Catalog,
        api: ShopApiProtocol,
        views: StorefrontViews,
        success_close_delay: float = 1.0,
    ):
        self.surface = ChatSurface()
        self.basket = BasketStore()
        self.draft = OrderDraft(api)
        self.message: Message | None = None
        self.basket_changed = False
        self._tasks: set[asyncio.Task] = set()
        self.controller = ScreenController(
            catalog,
            self.basket,
            self.draft,
            modal=self.surface,
            page=self.surface,
            views=views,
            on_basket_change=self._on_basket_change,
            scheduler=self.schedule,
            success_close_delay=success_close_delay,
        )

    def _on_basket_change(self, count: int) -> None:
        self.basket_changed = True

    def pop_basket_changed(self) -> bool:
        changed, self.basket_changed = self.basket_changed, False
        return changed

    async def flush(self, message: Message, edit: bool = False) -> None:
        content = self.surface.current()
        if content is None:
            return
        sent = await show(message, content, edit=edit)
        if sent is not None:
            self.message = sent

    def schedule(self, delay: float, callback: Callable[..., Any], *args: Any) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(delay, self._fire, callback, args)

    def _fire(self, callback: Callable[..., Any], args: tuple) -> None:
        before = self.controller.screen
        callback(*args)
        if self.controller.screen is before or self.message is None:
            return
        task = asyncio.create_task(self.flush(self.message, edit=True))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


class SessionRegistry:
    """In-memory sessions keyed by chat id; nothing outlives the process."""

    def __init__(self, factory: Callable[[], Session]):
        self._factory = factory
        self._sessions: dict[int, Session] = {}

    def get(self, chat_id: int) -> Session:
        session = self._sessions.get(chat_id)
        if session is None:
            session = self._factory()
            session.controller.show_catalog()
            self._sessions[chat_id] = session
            logger.debug("Session created for chat %s", chat_id)
        return session

    def __len__(self) -> int:
        return len(self._sessions)


def build_registry(settings: Settings, catalog: Catalog, api: ShopApiProtocol) -> SessionRegistry:
    views = StorefrontViews(cdn_base=settings.cdn_base(), currency_label=settings.currency_label)
    return SessionRegistry(
        lambda: Session(catalog, api, views, success_close_delay=settings.success_close_delay)
    )


def split_contacts(text: str) -> list[tuple[str, str]]:
    """
    Route a contacts message to ``email`` and ``phone`` fields.

    Words containing ``@`` are emails; the rest of the line is the phone, so
    both may share one line: ``a@b.com +7 912 345 67 89``.
    """
    fields = []
    for line in text.splitlines():
        words = line.split()
        fields.extend(("email", w) for w in words if "@" in w)
        phone = " ".join(w for w in words if "@" not in w)
        if phone:
            fields.append(("phone", phone))
    return fields
