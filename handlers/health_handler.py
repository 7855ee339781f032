"""
handlers/health_handler.py
--------------------------
Liveness checks: a direct reply, and a test post to the default channel.
"""

from telegram import Update
from telegram.error import BadRequest, Forbidden, TelegramError
from telegram.ext import ContextTypes

import config
from handlers.dispatch import respond
from models.result import HandlerResult, Outcome
from security.auth import authorized_only
from services.container import BotServices, get_services
from utils.logger import get_logger

logger = get_logger(__name__)

BOT_OK = "Bot is Working Fine!"
TEST_MESSAGE = "Hello! This is a test message."
NO_CHANNEL = "No default channel is configured. Set DEFAULT_CHANNEL_ID."
CHANNEL_NOT_FOUND = "Channel not found. Make sure the DEFAULT_CHANNEL_ID is correct."
SEND_ERROR = "An error occurred while sending the message."


async def post_test_message(services: BotServices, channel_id: str) -> HandlerResult:
    """Post `TEST_MESSAGE` to the configured default channel."""
    if not channel_id:
        return HandlerResult.no_data(NO_CHANNEL)

    logger.info(f"Attempting to send test message to channel {channel_id}")
    try:
        await services.transport.send_text(channel_id, TEST_MESSAGE)
    except (BadRequest, Forbidden) as e:
        return HandlerResult.failed(Outcome.TRANSPORT_ERROR, CHANNEL_NOT_FOUND, e)
    except TelegramError as e:
        return HandlerResult.failed(Outcome.TRANSPORT_ERROR, SEND_ERROR, e)
    return HandlerResult.success()


@authorized_only
async def check_bot_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle `!check bot` and /checkbot."""
    try:
        await get_services(context).transport.send_text(update.effective_chat.id, BOT_OK)
    except TelegramError as e:
        logger.error(f"Health reply failed: {e}")


@authorized_only
async def check_healthy_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle `!check healthy` and /healthy."""
    result = await post_test_message(get_services(context), config.DEFAULT_CHANNEL_ID)
    await respond(update, context, result)
