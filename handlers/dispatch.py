"""
handlers/dispatch.py
--------------------
Turns the `HandlerResult` of a command flow into a user-visible reply.
"""

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from models.result import HandlerResult
from services.container import get_services
from utils.logger import get_logger

logger = get_logger(__name__)


async def respond(update: Update, context: ContextTypes.DEFAULT_TYPE, result: HandlerResult) -> None:
    """
    Report a finished flow to the chat it came from.

    Successful flows already posted their output. Failures are logged with
    their traceback; the reply (a "try again" note or a short apology) is
    sent best effort, and a failure to send it is only logged.
    """
    if result.ok:
        return

    if result.error is not None:
        logger.error(
            f"Command failed ({result.outcome.value}): {result.error}",
            exc_info=result.error,
        )

    chat = update.effective_chat
    if not result.reply or chat is None:
        return

    try:
        await get_services(context).transport.send_text(chat.id, result.reply)
    except TelegramError as e:
        logger.error(f"Could not notify chat {chat.id}: {e}")
