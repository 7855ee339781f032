"""
handlers/shop_handler.py
------------------------
Handles the Fortnite shop command and the ◀️ / ▶️ buttons of shop viewers.
"""

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from handlers.dispatch import respond
from models.display import MessageRef
from models.result import HandlerResult, Outcome
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from services.container import BotServices, get_services
from services.paginator import Direction, PageIndexError, paginate
from services.transport import NAV_PREFIX
from utils.logger import get_logger

logger = get_logger(__name__)

NO_SHOP_DATA = "Shop data not available right now. Please try again later."
SHOP_ERROR = "An error occurred while fetching the shop data."


async def show_shop(services: BotServices, chat_id: int) -> HandlerResult:
    """Fetch today's shop and open a paged viewer on it in `chat_id`."""
    items = await services.shop.fetch_current_catalog()
    if not items:
        return HandlerResult.no_data(NO_SHOP_DATA)

    try:
        page_set = paginate(items, services.page_size)
        await services.viewers.create_viewer(chat_id, page_set)
    except TelegramError as e:
        return HandlerResult.failed(Outcome.TRANSPORT_ERROR, SHOP_ERROR, e)
    except (PageIndexError, ValueError) as e:
        return HandlerResult.failed(Outcome.INTERNAL_ERROR, SHOP_ERROR, e)

    logger.info(f"Shop posted to chat {chat_id}: {len(items)} items, {page_set.page_count} pages")
    return HandlerResult.success()


@authorized_only
@rate_limited
async def shop_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle `!fortnite shop` and /shop."""
    result = await show_shop(get_services(context), update.effective_chat.id)
    await respond(update, context, result)


@authorized_only
async def navigation_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle a ◀️ / ▶️ press on a shop viewer."""
    query = update.callback_query
    try:
        direction = Direction(query.data[len(NAV_PREFIX):])
    except ValueError:
        logger.warning(f"Unknown navigation data: {query.data!r}")
        direction = None

    if direction is not None and query.message is not None:
        message = MessageRef(chat_id=query.message.chat_id, message_id=query.message.message_id)
        await get_services(context).viewers.navigate(
            message, direction, from_bot=query.from_user.is_bot
        )

    try:
        await query.answer()
    except TelegramError as e:
        logger.debug(f"Could not answer callback query: {e}")
