"""
main.py
-------
Entry point for the Game Deals Telegram bot.

Responsibilities:
    - Validate configuration.
    - Build the Telegram application and its services.
    - Register the command router and run until interrupted.
"""

import sys

from telegram import BotCommand
from telegram.ext import Application

import config
from handlers.router import register_handlers
from services.container import SERVICES_KEY, build_services
from utils.logger import get_logger

logger = get_logger(__name__)


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [
        BotCommand("shop", "🛒 Fortnite item shop"),
        BotCommand("sales", "🔥 Steam sales"),
        BotCommand("checkbot", "✅ Is the bot alive?"),
        BotCommand("healthy", "📡 Test post to the default channel"),
        BotCommand("help", "📖 Show help"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


async def close_viewers(application: Application) -> None:
    """Strip navigation buttons from viewers still open at shutdown."""
    services = application.bot_data.get(SERVICES_KEY)
    if services is not None:
        await services.viewers.shutdown()


def build_application(token: str) -> Application:
    app = (
        Application.builder()
        .token(token)
        .concurrent_updates(True)
        .post_init(set_bot_commands)
        .post_stop(close_viewers)
        .build()
    )
    if app.job_queue is None:
        logger.warning("Job queue unavailable; viewer expiry falls back to asyncio tasks.")
    app.bot_data[SERVICES_KEY] = build_services(app.bot, app.job_queue)
    register_handlers(app)
    return app


def main() -> None:
    """Initialize and run the bot."""
    if not config.TRANSPORT_TOKEN:
        logger.error("TRANSPORT_TOKEN is not set. Add it to the environment or .env file.")
        sys.exit(1)
    if not config.EXTERNAL_API_KEY:
        logger.warning("EXTERNAL_API_KEY is not set; the Fortnite shop will be unavailable.")

    logger.info("Starting Telegram bot...")
    app = build_application(config.TRANSPORT_TOKEN)

    logger.info("🚀 Game Deals bot is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message", "callback_query"])
    logger.info("Game Deals bot stopped.")


if __name__ == "__main__":
    main()
