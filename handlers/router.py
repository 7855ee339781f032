"""
handlers/router.py
------------------
Maps inbound text to command handlers and registers everything on the
Telegram application.

Both the original literal commands (``!fortnite shop``) and slash
commands (``/shop``) are accepted.
"""

from typing import Awaitable, Callable, Optional

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from handlers.health_handler import check_bot_command, check_healthy_command
from handlers.sales_handler import sales_command
from handlers.shop_handler import navigation_callback, shop_command
from handlers.start_handler import help_command, start_command
from services.transport import NAV_PATTERN
from utils.logger import get_logger

logger = get_logger(__name__)

Handler = Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]]

TEXT_COMMANDS: dict[str, Handler] = {
    "!fortnite shop": shop_command,
    "!steam sales": sales_command,
    "!check bot": check_bot_command,
    "!check healthy": check_healthy_command,
}

SLASH_COMMANDS: dict[str, Handler] = {
    "start": start_command,
    "help": help_command,
    "shop": shop_command,
    "sales": sales_command,
    "checkbot": check_bot_command,
    "healthy": check_healthy_command,
}


def match_command(text: str) -> Optional[Handler]:
    """Return the handler for a literal text command, ignoring case and outer whitespace."""
    return TEXT_COMMANDS.get(" ".join(text.split()).lower())


async def route_text(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Dispatch a plain text message to its command handler, if it is one."""
    message = update.effective_message
    if not message or not message.text:
        return
    handler = match_command(message.text)
    if handler is None:
        return
    await handler(update, context)


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log anything that escaped a handler; polling carries on."""
    logger.error(f"Unhandled error while processing update: {context.error}", exc_info=context.error)


def register_handlers(app: Application) -> None:
    for name, callback in SLASH_COMMANDS.items():
        app.add_handler(CommandHandler(name, callback))
    app.add_handler(CallbackQueryHandler(navigation_callback, pattern=NAV_PATTERN))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, route_text))
    app.add_error_handler(on_error)
