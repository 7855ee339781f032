"""
handlers/sales_handler.py
-------------------------
Handles the Steam sales command.
"""

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from handlers.dispatch import respond
from models.result import HandlerResult, Outcome
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from services.container import BotServices, get_services

NO_SALES_DATA = "No Steam sales available at the moment. Please try again later."
SALES_ERROR = "An error occurred while fetching the Steam sales."


async def show_sales(services: BotServices, chat_id: int) -> HandlerResult:
    records = await services.sales.fetch_current_sales()
    if not records:
        return HandlerResult.no_data(NO_SALES_DATA)

    try:
        await services.batch_sender.send_batches(chat_id, records)
    except TelegramError as e:
        return HandlerResult.failed(Outcome.TRANSPORT_ERROR, SALES_ERROR, e)
    return HandlerResult.success()


@authorized_only
@rate_limited
async def sales_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle `!steam sales` and /sales."""
    result = await show_sales(get_services(context), update.effective_chat.id)
    await respond(update, context, result)
