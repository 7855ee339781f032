"""
services/transport.py
---------------------
Outbound message sink over the Telegram Bot API.

The transport is constructed once at startup around the application's
`Bot` and handed to the services that post or edit messages. Navigation
affordances are a single row of inline keyboard buttons.
"""

from typing import Optional, Union

from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, LinkPreviewOptions
from telegram.constants import ParseMode
from telegram.error import BadRequest

from models.display import DisplayUnit, MessageRef
from utils.logger import get_logger

logger = get_logger(__name__)

NAV_PREFIX = "page:"
NAV_PREV = f"{NAV_PREFIX}prev"
NAV_NEXT = f"{NAV_PREFIX}next"
NAV_PATTERN = rf"^{NAV_PREFIX}(prev|next)$"


def navigation_keyboard() -> InlineKeyboardMarkup:
    """The ◀️ / ▶️ button row attached to paginated messages."""
    return InlineKeyboardMarkup([[
        InlineKeyboardButton("◀️", callback_data=NAV_PREV),
        InlineKeyboardButton("▶️", callback_data=NAV_NEXT),
    ]])


def _preview(unit: DisplayUnit) -> LinkPreviewOptions:
    if unit.image_url:
        return LinkPreviewOptions(url=unit.image_url, prefer_small_media=True, show_above_text=False)
    return LinkPreviewOptions(is_disabled=True)


def _is_not_modified(error: BadRequest) -> bool:
    return "not modified" in str(error).lower()


class TelegramTransport:
    """
    Thin async wrapper around `telegram.Bot`.

    All methods may raise `telegram.error.TelegramError`; callers decide
    whether a failure is surfaced or only logged.
    """

    def __init__(self, bot: Bot):
        self.bot = bot

    async def send(self, chat_id: Union[int, str], content: Union[str, DisplayUnit],
                   with_navigation: bool = False) -> MessageRef:
        """Post a message, optionally with navigation buttons, and return its identity."""
        unit = content if isinstance(content, DisplayUnit) else DisplayUnit(text=content)
        message = await self.bot.send_message(
            chat_id=chat_id,
            text=unit.text,
            parse_mode=ParseMode.HTML,
            link_preview_options=_preview(unit),
            reply_markup=navigation_keyboard() if with_navigation else None,
        )
        return MessageRef(chat_id=message.chat_id, message_id=message.message_id)

    async def send_text(self, chat_id: Union[int, str], text: str, html: bool = False) -> MessageRef:
        """Post plain text (or HTML when `html` is set) without a link preview."""
        message = await self.bot.send_message(
            chat_id=chat_id,
            text=text,
            parse_mode=ParseMode.HTML if html else None,
            link_preview_options=LinkPreviewOptions(is_disabled=True),
        )
        return MessageRef(chat_id=message.chat_id, message_id=message.message_id)

    async def update(self, ref: MessageRef, unit: DisplayUnit, with_navigation: bool = True) -> None:
        """Replace the content of an already posted message in place."""
        try:
            await self.bot.edit_message_text(
                text=unit.text,
                chat_id=ref.chat_id,
                message_id=ref.message_id,
                parse_mode=ParseMode.HTML,
                link_preview_options=_preview(unit),
                reply_markup=navigation_keyboard() if with_navigation else None,
            )
        except BadRequest as e:
            if not _is_not_modified(e):
                raise

    async def remove_navigation(self, ref: MessageRef) -> None:
        await self._set_markup(ref, None)

    async def _set_markup(self, ref: MessageRef, markup: Optional[InlineKeyboardMarkup]) -> None:
        try:
            await self.bot.edit_message_reply_markup(
                chat_id=ref.chat_id,
                message_id=ref.message_id,
                reply_markup=markup,
            )
        except BadRequest as e:
            # Telegram rejects edits that change nothing, e.g. removing
            # buttons from a message that never had any.
            if not _is_not_modified(e):
                raise
            logger.debug(f"Markup already up to date for message {ref.message_id}")
