"""Renderers for every screen: data in, message text and keyboard out."""

from __future__ import annotations

from dataclasses import dataclass

from aiogram.types import InlineKeyboardMarkup

from .keyboards import (
    basket_kb,
    catalog_error_kb,
    catalog_kb,
    order_address_kb,
    order_contacts_kb,
    product_kb,
    success_kb,
)
from .models import PAYMENT_LABELS, Product
from .utils import escape_html, format_price, resolve_image_url


@dataclass(frozen=True)
class Rendered:
    text: str
    keyboard: InlineKeyboardMarkup | None = None
    photo: str | None = None


class StorefrontViews:
    """Stateless screen renderers bound to display settings."""

    def __init__(self, cdn_base: str = "", currency_label: str = "синапсов"):
        self._cdn_base = cdn_base
        self._currency = currency_label

    def price(self, price: int | None) -> str:
        return format_price(price, self._currency)

    def catalog(self, products: list[Product], error: str | None = None) -> Rendered:
        if error:
            return Rendered(
                text=f"⚠️ <b>Каталог недоступен</b>\n\n{escape_html(error)}",
                keyboard=catalog_error_kb(),
            )
        if not products:
            return Rendered(text="Каталог пуст.", keyboard=catalog_error_kb())
        return Rendered(
            text=f"🗂 <b>Каталог</b>\n\nТоваров: {len(products)}",
            keyboard=catalog_kb(products, [self.price(p.price) for p in products]),
        )

    def product_detail(self, product: Product, in_basket: bool) -> Rendered:
        lines = [
            f"<i>{escape_html(product.category)}</i>",
            f"<b>{escape_html(product.title)}</b>",
        ]
        if product.description:
            lines.append("")
            lines.append(escape_html(product.description))
        lines.append("")
        lines.append(f"💰 <b>{self.price(product.price)}</b>")
        if in_basket:
            lines.append("🧺 В корзине")
        return Rendered(
            text="\n".join(lines),
            keyboard=product_kb(product, in_basket),
            photo=resolve_image_url(product.image, self._cdn_base) or None,
        )

    def basket(self, items: list[Product], total: int) -> Rendered:
        if not items:
            text = "🧺 <b>Корзина</b>\n\nПока пусто."
        else:
            lines = [
                f"{idx}. {escape_html(p.title)} — {self.price(p.price)}"
                for idx, p in enumerate(items, start=1)
            ]
            text = "🧺 <b>Корзина</b>\n\n" + "\n".join(lines)
        text += f"\n\n💰 <b>{self.price(total)}</b>"
        return Rendered(text=text, keyboard=basket_kb(items, can_checkout=bool(items) and total > 0))

    def order_address(
        self,
        address: str,
        payment: str,
        errors: list[str],
        can_advance: bool,
    ) -> Rendered:
        lines = ["📦 <b>Способ оплаты и адрес</b>", ""]
        lines.append(f"Оплата: {PAYMENT_LABELS.get(payment, '—')}")
        lines.append(f"Адрес: {escape_html(address) if address.strip() else '—'}")
        lines.append("")
        lines.append("Выберите способ оплаты и отправьте адрес доставки сообщением.")
        if errors:
            lines.append("")
            lines.append("❌ " + escape_html(", ".join(errors)))
        return Rendered(text="\n".join(lines), keyboard=order_address_kb(payment, can_advance))

    def order_contacts(
        self,
        email: str | None,
        phone: str | None,
        errors: list[str],
        can_pay: bool,
        pending: bool = False,
    ) -> Rendered:
        lines = ["📇 <b>Контакты</b>", ""]
        lines.append(f"Email: {escape_html(email) if email else '—'}")
        lines.append(f"Телефон: {escape_html(phone) if phone else '—'}")
        lines.append("")
        lines.append("Отправьте email и телефон (+7 912 345 67 89) одним сообщением или по очереди.")
        if errors:
            lines.append("")
            lines.append("❌ " + escape_html(", ".join(errors)))
        return Rendered(text="\n".join(lines), keyboard=order_contacts_kb(can_pay, pending))

    def success(self, message: str, total: int | None = None) -> Rendered:
        text = f"✅ <b>{escape_html(message)}</b>"
        if total is not None:
            text += f"\n\nСписано {self.price(total)}"
        return Rendered(text=text, keyboard=success_kb())
