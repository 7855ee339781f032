"""
services/batch_sender.py
------------------------
Sends a long list of Steam sale records as consecutive monospaced tables,
followed by a link to the full listing.
"""

import html
from typing import Optional, Sequence, Union

from models.item import SaleRecord
from services.transport import TelegramTransport
from utils.logger import get_logger

logger = get_logger(__name__)

BATCH_SIZE = 20
TITLE_WIDTH = 20
ELLIPSIS = "..."

TABLE_HEADING = "🔥 Steam Sales 🔥"
TABLE_COLUMNS = "No  | Title                   | Discount | Original Price | Sale Price"
TABLE_RULE = "-" * 70

STEAM_SPECIALS_URL = (
    "https://store.steampowered.com/search/"
    "?sort_by=Price_ASC&supportedlang=english&specials=1&ndl=1"
)
TRAILER = f'<a href="{STEAM_SPECIALS_URL}">View more sales on Steam</a>'


def truncate_title(title: str, width: int = TITLE_WIDTH) -> str:
    """Cut `title` to `width` characters and mark the cut with an ellipsis."""
    if len(title) > width:
        return title[:width] + ELLIPSIS
    return title


def format_row(number: int, record: SaleRecord) -> str:
    title = truncate_title(record.title)
    return (
        f"{str(number):<4}  {title:<25} {record.discount:<9}    "
        f"{record.original_price:<15}  {record.sale_price}"
    )


def format_table(records: Sequence[SaleRecord], start_index: int = 0) -> str:
    """
    Build the plain-text table for one batch.

    Args:
        records: The records of this batch only.
        start_index: Zero-based position of the first record in the full
            listing; row numbers continue from it.
    """
    lines = [TABLE_HEADING, "", TABLE_COLUMNS, TABLE_RULE]
    for offset, record in enumerate(records):
        lines.append(format_row(start_index + offset + 1, record))
    return "\n".join(lines)


def chunked(records: Sequence[SaleRecord], size: int):
    """Yield (start_index, chunk) pairs of at most `size` records."""
    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    for start in range(0, len(records), size):
        yield start, records[start:start + size]


class BatchSender:
    """Posts sale tables one message at a time, in order."""

    def __init__(self, transport: TelegramTransport, batch_size: int = BATCH_SIZE):
        self.transport = transport
        self.batch_size = batch_size

    async def send_batches(self, chat_id: Union[int, str], records: Sequence[SaleRecord],
                           batch_size: Optional[int] = None) -> int:
        """
        Send every record, `batch_size` per message, then the trailer link.

        Each send is awaited before the next one is issued. A failed send
        propagates and the remaining batches are not sent.

        Returns:
            Number of table messages sent.
        """
        size = self.batch_size if batch_size is None else batch_size
        sent = 0
        for start, chunk in chunked(records, size):
            table = format_table(chunk, start)
            await self.transport.send_text(chat_id, f"<pre>{html.escape(table)}</pre>", html=True)
            sent += 1

        if sent:
            await self.transport.send_text(chat_id, TRAILER, html=True)
        logger.info(f"Sent {len(records)} sale records in {sent} batches to chat {chat_id}")
        return sent
