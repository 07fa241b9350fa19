from __future__ import annotations

from aiogram.types import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)

from .models import PAYMENT_LABELS, PAYMENT_METHODS, Product

CATALOG_BUTTON = "🗂 Каталог"
BASKET_BUTTON = "🧺 Корзина"


def basket_button_text(count: int = 0) -> str:
    """Basket label with the item counter, hidden when the basket is empty."""
    return f"{BASKET_BUTTON} ({count})" if count > 0 else BASKET_BUTTON


def persistent_menu(basket_count: int = 0) -> ReplyKeyboardMarkup:
    """Постоянное меню снизу экрана."""
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=CATALOG_BUTTON), KeyboardButton(text=basket_button_text(basket_count))],
        ],
        resize_keyboard=True,
        is_persistent=True,
    )


def _close_button() -> InlineKeyboardButton:
    return InlineKeyboardButton(text="✖️ Закрыть", callback_data="modal:close")


def catalog_kb(products: list[Product], price_labels: list[str]) -> InlineKeyboardMarkup:
    rows = []
    for product, price in zip(products, price_labels):
        title = product.title if len(product.title) <= 30 else product.title[:29] + "…"
        rows.append(
            [InlineKeyboardButton(text=f"{title} • {price}", callback_data=f"product:{product.id}")]
        )
    rows.append([InlineKeyboardButton(text=BASKET_BUTTON, callback_data="basket:show")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def catalog_error_kb() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[[InlineKeyboardButton(text="🔄 Обновить", callback_data="catalog:reload")]]
    )


def product_kb(product: Product, in_basket: bool) -> InlineKeyboardMarkup:
    if not product.is_available:
        action = InlineKeyboardButton(text="Недоступно", callback_data="noop")
    elif in_basket:
        action = InlineKeyboardButton(text="🗑 Удалить из корзины", callback_data="basket:remove")
    else:
        action = InlineKeyboardButton(text="🛒 В корзину", callback_data="basket:toggle")
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [action],
            [
                InlineKeyboardButton(text=BASKET_BUTTON, callback_data="basket:show"),
                _close_button(),
            ],
        ]
    )


def basket_kb(items: list[Product], can_checkout: bool) -> InlineKeyboardMarkup:
    """One delete row per line item, then checkout (disabled as noop) and close."""
    rows = []
    for idx, product in enumerate(items, start=1):
        title = product.title if len(product.title) <= 25 else product.title[:24] + "…"
        rows.append(
            [InlineKeyboardButton(text=f"🗑 {idx}. {title}", callback_data=f"basket:del:{product.id}")]
        )
    if can_checkout:
        checkout = InlineKeyboardButton(text="✅ Оформить", callback_data="checkout:start")
    else:
        checkout = InlineKeyboardButton(text="🚫 Оформить", callback_data="noop")
    rows.append([checkout, _close_button()])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def order_address_kb(selected_payment: str, can_advance: bool) -> InlineKeyboardMarkup:
    payment_row = []
    for token in PAYMENT_METHODS:
        mark = "🔘" if token == selected_payment else "⚪️"
        payment_row.append(
            InlineKeyboardButton(
                text=f"{mark} {PAYMENT_LABELS[token]}", callback_data=f"order:payment:{token}"
            )
        )
    if can_advance:
        next_btn = InlineKeyboardButton(text="Далее ➡️", callback_data="order:next")
    else:
        next_btn = InlineKeyboardButton(text="🚫 Далее", callback_data="noop")
    return InlineKeyboardMarkup(inline_keyboard=[payment_row, [next_btn, _close_button()]])


def order_contacts_kb(can_pay: bool, pending: bool) -> InlineKeyboardMarkup:
    if pending:
        pay_btn = InlineKeyboardButton(text="⏳ Отправляем…", callback_data="noop")
    elif can_pay:
        pay_btn = InlineKeyboardButton(text="💳 Оплатить", callback_data="order:pay")
    else:
        pay_btn = InlineKeyboardButton(text="🚫 Оплатить", callback_data="noop")
    return InlineKeyboardMarkup(inline_keyboard=[[pay_btn, _close_button()]])


def success_kb() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[[InlineKeyboardButton(text="За новыми покупками!", callback_data="success:close")]]
    )
