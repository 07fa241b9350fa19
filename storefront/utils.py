from __future__ import annotations

import html
import re

_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")

# +7 followed by ten digits, grouped 3-3-2-2 by single spaces or hyphens, or bare
_PHONE_GROUPED_RE = re.compile(r"\+7 ?\d{3}[ -]?\d{3}[ -]?\d{2}[ -]?\d{2}")
_PHONE_BARE_RE = re.compile(r"\+7\d{10}")


def escape_html(text: str) -> str:
    """
    Escape special characters for Telegram HTML parse mode.
    Handles: < > & and preserves other characters.
    """
    return html.escape(str(text))


def is_valid_email(email: str | None) -> bool:
    if not email:
        return False
    return _EMAIL_RE.fullmatch(email) is not None


def is_valid_phone(phone: str | None) -> bool:
    if not phone:
        return False
    return bool(_PHONE_GROUPED_RE.fullmatch(phone) or _PHONE_BARE_RE.fullmatch(phone))


def format_price(price: int | None, currency_label: str = "синапсов") -> str:
    if price is None:
        return "Бесценно"
    return f"{price:,} {currency_label}".replace(",", " ")


def resolve_image_url(image: str, cdn_base: str) -> str:
    """Absolute URLs pass through, relative ones are joined to the CDN base."""
    if not image:
        return ""
    if image.startswith("http"):
        return image
    return f"{cdn_base.rstrip('/')}/{image.lstrip('/')}"
