"""Tests for chat sessions and the message-backed surface."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from storefront.handlers.common import (
    ChatSurface,
    Session,
    SessionRegistry,
    show,
    split_contacts,
)
from storefront.models import CatalogScreen
from storefront.services import Catalog
from storefront.views import Rendered, StorefrontViews


class TestChatSurface:
    """Tests for ChatSurface."""

    def test_page_shown_when_modal_closed(self):
        surface = ChatSurface()
        page = Rendered(text="page")
        surface.set_page(page)
        assert surface.current() is page

    def test_modal_shown_over_page(self):
        surface = ChatSurface()
        surface.set_page(Rendered(text="page"))
        modal = Rendered(text="modal")
        surface.open(modal)
        assert surface.current() is modal

        surface.close()
        surface.clear_content()
        assert surface.current().text == "page"


class TestSplitContacts:
    """Tests for split_contacts()."""

    def test_routes_by_at_sign(self):
        assert split_contacts("a@b.com\n+7 912 345 67 89\n") == [
            ("email", "a@b.com"),
            ("phone", "+7 912 345 67 89"),
        ]

    def test_email_and_phone_on_one_line(self):
        assert split_contacts("a@b.com +7 912-345-67-89") == [
            ("email", "a@b.com"),
            ("phone", "+7 912-345-67-89"),
        ]

    def test_phone_before_email_on_one_line(self):
        assert split_contacts("+79123456789  a@b.com") == [
            ("email", "a@b.com"),
            ("phone", "+79123456789"),
        ]

    def test_blank_input(self):
        assert split_contacts("   \n") == []


class TestShow:
    """Tests for show()."""

    @pytest.mark.asyncio
    async def test_edit_in_place(self):
        message = MagicMock()
        message.edit_text = AsyncMock()
        message.answer = AsyncMock()

        result = await show(message, Rendered(text="hi"), edit=True)

        message.edit_text.assert_awaited_once()
        message.answer.assert_not_awaited()
        assert result is message

    @pytest.mark.asyncio
    async def test_edit_failure_falls_back_to_new_message(self):
        message = MagicMock()
        message.edit_text = AsyncMock(side_effect=Exception("photo message"))
        message.delete = AsyncMock()
        message.answer = AsyncMock(return_value="sent")

        result = await show(message, Rendered(text="hi"), edit=True)

        message.delete.assert_awaited_once()
        assert result == "sent"

    @pytest.mark.asyncio
    async def test_photo_sent_as_new_message(self):
        message = MagicMock()
        message.delete = AsyncMock()
        message.answer_photo = AsyncMock(return_value="photo")

        result = await show(message, Rendered(text="cap", photo="https://cdn.test/x.png"), edit=True)

        message.delete.assert_awaited_once()
        message.answer_photo.assert_awaited_once()
        assert result == "photo"


class TestSessionRegistry:
    """Tests for SessionRegistry and Session wiring."""

    @pytest.mark.asyncio
    async def test_sessions_are_per_chat(self, api):
        catalog = Catalog(api)
        await catalog.load()
        registry = SessionRegistry(lambda: Session(catalog, api, StorefrontViews()))

        first = registry.get(1)
        assert registry.get(1) is first
        assert registry.get(2) is not first
        assert len(registry) == 2
        assert isinstance(first.controller.screen, CatalogScreen)
        assert first.surface.current() is not None

    @pytest.mark.asyncio
    async def test_basket_change_flag(self, api):
        catalog = Catalog(api)
        await catalog.load()
        session = Session(catalog, api, StorefrontViews())

        session.controller.open_product("a")
        session.controller.toggle_basket()

        assert session.pop_basket_changed() is True
        assert session.pop_basket_changed() is False
        assert Session(catalog, api, StorefrontViews()).basket.is_empty
