"""
services/container.py
---------------------
Builds the bot's collaborators once at startup and makes them reachable
from handlers through `context.bot_data`.
"""

from dataclasses import dataclass
from typing import Optional

from telegram import Bot
from telegram.ext import ContextTypes, JobQueue

import config
from providers.fortnite_shop import FortniteShopProvider
from providers.steam_sales import SteamSalesProvider
from services.batch_sender import BatchSender
from services.paginator import ViewerRegistry
from services.transport import TelegramTransport

SERVICES_KEY = "services"


@dataclass
class BotServices:
    transport: TelegramTransport
    viewers: ViewerRegistry
    batch_sender: BatchSender
    shop: FortniteShopProvider
    sales: SteamSalesProvider
    page_size: int = config.SHOP_PAGE_SIZE


def build_services(bot: Bot, job_queue: Optional[JobQueue] = None) -> BotServices:
    """Wire the transport, registries and providers from configuration."""
    transport = TelegramTransport(bot)
    return BotServices(
        transport=transport,
        viewers=ViewerRegistry(
            transport,
            job_queue=job_queue,
            lifetime_seconds=config.VIEWER_LIFETIME_MS / 1000,
        ),
        batch_sender=BatchSender(transport, batch_size=config.SALES_BATCH_SIZE),
        shop=FortniteShopProvider(config.EXTERNAL_API_KEY, timeout=config.HTTP_TIMEOUT_SECONDS),
        sales=SteamSalesProvider(timeout=config.HTTP_TIMEOUT_SECONDS),
        page_size=config.SHOP_PAGE_SIZE,
    )


def get_services(context: ContextTypes.DEFAULT_TYPE) -> BotServices:
    return context.bot_data[SERVICES_KEY]
