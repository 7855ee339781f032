"""
Tests for the Telegram transport, against a mocked `telegram.Bot`.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from telegram import InlineKeyboardMarkup
from telegram.constants import ParseMode
from telegram.error import BadRequest

from models.display import DisplayUnit, MessageRef
from services.transport import NAV_NEXT, NAV_PREV, TelegramTransport, navigation_keyboard
from tests.conftest import CHAT_ID

NOT_MODIFIED = (
    "Message is not modified: specified new message content and reply markup "
    "are exactly the same as a current content and reply markup of the message"
)


@pytest.fixture
def bot() -> AsyncMock:
    mock = AsyncMock()
    mock.send_message.return_value = Mock(chat_id=CHAT_ID, message_id=77)
    return mock


@pytest.fixture
def transport(bot) -> TelegramTransport:
    return TelegramTransport(bot)


def _buttons(markup: InlineKeyboardMarkup) -> list[tuple[str, str]]:
    return [(button.text, button.callback_data) for row in markup.inline_keyboard for button in row]


# ============================================================================
# Keyboard
# ============================================================================


def test_navigation_keyboard_is_one_row_prev_then_next():
    markup = navigation_keyboard()

    assert len(markup.inline_keyboard) == 1
    assert _buttons(markup) == [("◀️", "page:prev"), ("▶️", "page:next")]
    assert (NAV_PREV, NAV_NEXT) == ("page:prev", "page:next")


# ============================================================================
# send / send_text
# ============================================================================


@pytest.mark.asyncio
async def test_send_with_navigation(transport, bot):
    unit = DisplayUnit(text="<b>Shop</b>", image_url="https://img.example/1.png")

    ref = await transport.send(CHAT_ID, unit, with_navigation=True)

    assert ref == MessageRef(chat_id=CHAT_ID, message_id=77)
    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == CHAT_ID
    assert kwargs["text"] == "<b>Shop</b>"
    assert kwargs["parse_mode"] == ParseMode.HTML
    assert kwargs["link_preview_options"].url == "https://img.example/1.png"
    assert not kwargs["link_preview_options"].is_disabled
    assert _buttons(kwargs["reply_markup"]) == [("◀️", NAV_PREV), ("▶️", NAV_NEXT)]


@pytest.mark.asyncio
async def test_send_without_navigation_or_image(transport, bot):
    await transport.send(CHAT_ID, DisplayUnit(text="Only page"))

    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["reply_markup"] is None
    assert kwargs["link_preview_options"].is_disabled is True


@pytest.mark.asyncio
async def test_send_accepts_plain_string(transport, bot):
    await transport.send(CHAT_ID, "hello")

    assert bot.send_message.await_args.kwargs["text"] == "hello"


@pytest.mark.asyncio
async def test_send_text_plain_and_html(transport, bot):
    await transport.send_text(CHAT_ID, "Bot is Working Fine!")
    assert bot.send_message.await_args.kwargs["parse_mode"] is None
    assert bot.send_message.await_args.kwargs["link_preview_options"].is_disabled is True

    await transport.send_text(CHAT_ID, "<pre>table</pre>", html=True)
    assert bot.send_message.await_args.kwargs["parse_mode"] == ParseMode.HTML


# ============================================================================
# update
# ============================================================================


@pytest.mark.asyncio
async def test_update_edits_in_place(transport, bot):
    ref = MessageRef(CHAT_ID, 77)

    await transport.update(ref, DisplayUnit(text="Page 2", image_url="https://img.example/7.png"))

    kwargs = bot.edit_message_text.await_args.kwargs
    assert kwargs["chat_id"] == CHAT_ID
    assert kwargs["message_id"] == 77
    assert kwargs["text"] == "Page 2"
    assert kwargs["parse_mode"] == ParseMode.HTML
    assert kwargs["link_preview_options"].url == "https://img.example/7.png"
    assert _buttons(kwargs["reply_markup"]) == [("◀️", NAV_PREV), ("▶️", NAV_NEXT)]
    bot.send_message.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_without_navigation(transport, bot):
    await transport.update(MessageRef(CHAT_ID, 77), DisplayUnit(text="x"), with_navigation=False)

    assert bot.edit_message_text.await_args.kwargs["reply_markup"] is None


@pytest.mark.asyncio
async def test_update_not_modified_is_success(transport, bot):
    bot.edit_message_text.side_effect = BadRequest(NOT_MODIFIED)

    await transport.update(MessageRef(CHAT_ID, 77), DisplayUnit(text="same"))


@pytest.mark.asyncio
async def test_update_other_bad_request_raises(transport, bot):
    bot.edit_message_text.side_effect = BadRequest("Message to edit not found")

    with pytest.raises(BadRequest):
        await transport.update(MessageRef(CHAT_ID, 77), DisplayUnit(text="x"))


# ============================================================================
# remove_navigation
# ============================================================================


@pytest.mark.asyncio
async def test_remove_navigation_clears_markup(transport, bot):
    await transport.remove_navigation(MessageRef(CHAT_ID, 77))

    bot.edit_message_reply_markup.assert_awaited_once_with(
        chat_id=CHAT_ID, message_id=77, reply_markup=None,
    )


@pytest.mark.asyncio
async def test_remove_navigation_from_message_without_buttons(transport, bot):
    bot.edit_message_reply_markup.side_effect = BadRequest(NOT_MODIFIED)

    await transport.remove_navigation(MessageRef(CHAT_ID, 77))

    bot.edit_message_reply_markup.assert_awaited_once()


@pytest.mark.asyncio
async def test_remove_navigation_other_bad_request_raises(transport, bot):
    bot.edit_message_reply_markup.side_effect = BadRequest("Chat not found")

    with pytest.raises(BadRequest):
        await transport.remove_navigation(MessageRef(CHAT_ID, 77))
