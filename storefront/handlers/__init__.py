"""Handlers package for the Telegram bot."""

from .basket import register_basket_handlers
from .catalog import register_catalog_handlers
from .checkout import register_checkout_handlers
from .common import Session, SessionRegistry, build_registry
from .start import register_start_handlers

__all__ = [
    "Session",
    "SessionRegistry",
    "build_registry",
    "register_start_handlers",
    "register_catalog_handlers",
    "register_basket_handlers",
    "register_checkout_handlers",
]
