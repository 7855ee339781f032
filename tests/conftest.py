"""
Pytest configuration and shared fixtures.

Telegram is never contacted: services talk to an `AsyncMock` shaped like
`TelegramTransport`, and updates/contexts are plain mocks carrying only
the attributes the handlers read.
"""

import itertools
from typing import Optional
from unittest.mock import AsyncMock, Mock

import pytest

from models.display import MessageRef
from models.item import Item, SaleRecord
from providers.fortnite_shop import FortniteShopProvider
from providers.steam_sales import SteamSalesProvider
from security.rate_limiter import limiter
from services.batch_sender import BatchSender
from services.container import SERVICES_KEY, BotServices
from services.paginator import ViewerRegistry
from services.transport import TelegramTransport

CHAT_ID = 555


def make_items(count: int) -> list[Item]:
    return [
        Item(
            name=f"Item {i}",
            price=100 * i,
            rarity="Rare",
            image_url=f"https://img.example/{i}.png",
        )
        for i in range(1, count + 1)
    ]


def make_sales(count: int) -> list[SaleRecord]:
    return [
        SaleRecord(
            title=f"Game {i}",
            discount="-50%",
            original_price="$19.99",
            sale_price="$9.99",
        )
        for i in range(1, count + 1)
    ]


def make_update(text: str = "", user_id: int = 42, is_bot: bool = False,
                chat_id: int = CHAT_ID, callback_query: Optional[Mock] = None) -> Mock:
    """Build a mock Update for a text message or a button press."""
    update = Mock()
    update.effective_user = Mock(id=user_id, is_bot=is_bot, username="player", first_name="Player")
    update.effective_chat = Mock(id=chat_id)
    update.effective_message = Mock(text=text, reply_text=AsyncMock())
    update.message = update.effective_message
    update.callback_query = callback_query
    return update


def make_callback_query(data: str, message: MessageRef, is_bot: bool = False) -> Mock:
    query = Mock()
    query.data = data
    query.message = Mock(chat_id=message.chat_id, message_id=message.message_id)
    query.from_user = Mock(is_bot=is_bot)
    query.answer = AsyncMock()
    return query


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def transport() -> AsyncMock:
    """Transport mock; every posted message gets a fresh message id."""
    mock = AsyncMock(spec=TelegramTransport)
    ids = itertools.count(1000)

    def _ref(chat_id, *args, **kwargs):
        return MessageRef(chat_id=chat_id, message_id=next(ids))

    mock.send.side_effect = _ref
    mock.send_text.side_effect = _ref
    return mock


@pytest.fixture
def job_queue() -> Mock:
    return Mock()


@pytest.fixture
def viewers(transport, job_queue) -> ViewerRegistry:
    return ViewerRegistry(transport, job_queue=job_queue, lifetime_seconds=60)


@pytest.fixture
def services(transport, viewers) -> BotServices:
    return BotServices(
        transport=transport,
        viewers=viewers,
        batch_sender=BatchSender(transport, batch_size=20),
        shop=AsyncMock(spec=FortniteShopProvider),
        sales=AsyncMock(spec=SteamSalesProvider),
        page_size=5,
    )


@pytest.fixture
def context(services) -> Mock:
    ctx = Mock()
    ctx.bot_data = {SERVICES_KEY: services}
    return ctx
