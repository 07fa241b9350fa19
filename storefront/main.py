"""Main bot entry point."""

from __future__ import annotations

import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.types import ErrorEvent

from .api import ShopApi
from .config import Settings
from .errors import LoadError
from .handlers import (
    build_registry,
    register_basket_handlers,
    register_catalog_handlers,
    register_checkout_handlers,
    register_start_handlers,
)
from .services import Catalog

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger(__name__)

# Reduce noise from httpx
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


async def global_error_handler(event: ErrorEvent) -> bool:
    """Global error handler for all unhandled exceptions."""
    logger.error(
        "Unhandled exception in handler",
        exc_info=event.exception,
        extra={
            "update": event.update,
        },
    )

    # Try to notify user
    try:
        update = event.update
        if update.message:
            await update.message.answer(
                "❌ Произошла ошибка. Попробуйте ещё раз или используйте /start"
            )
        elif update.callback_query:
            await update.callback_query.answer(
                "Произошла ошибка. Попробуйте ещё раз.", show_alert=True
            )
    except Exception as e:
        logger.error(f"Failed to notify user about error: {e}")

    return True  # Error was handled


async def main():
    """Main application entry point."""
    logger.info("Starting bot...")

    cfg = Settings()
    logger.info("Loaded config: api_url=%s", cfg.api_base())

    bot = Bot(token=cfg.telegram_bot_token)
    dp = Dispatcher()

    # Ensure polling works even if webhook was previously set for this bot token
    try:
        me = await bot.get_me()
        logger.info("Bot identity: @%s (%s)", me.username, me.id)
        await bot.delete_webhook(drop_pending_updates=True)
    except Exception as e:
        logger.error("Failed to initialize bot (get_me/delete_webhook): %s", e)
        raise

    dp.error.register(global_error_handler)

    api = ShopApi(cfg.api_base(), timeout=cfg.request_timeout)
    catalog = Catalog(api)
    try:
        await catalog.load()
    except LoadError as e:
        # No automatic retry; users get a reload button
        logger.warning("Starting with an empty catalog: %s", e)
    else:
        if catalog.is_empty:
            logger.warning("Shop API returned no products")

    sessions = build_registry(cfg, catalog, api)

    # Order matters! The checkout free-text handler is a catch-all
    register_start_handlers(dp, sessions)
    register_catalog_handlers(dp, sessions)
    register_basket_handlers(dp, sessions)
    register_checkout_handlers(dp, sessions)
    logger.info("Handlers registered")

    logger.info("Bot started, polling for updates...")
    await dp.start_polling(bot)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
