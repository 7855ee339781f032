"""
providers/steam_sales.py
------------------------
Scrapes the Steam store "specials" search page and normalizes each
discounted result row into a `SaleRecord`.
"""

from typing import Optional

import httpx
from bs4 import BeautifulSoup

from models.item import SaleRecord
from utils.logger import get_logger

logger = get_logger(__name__)

SEARCH_URL = "https://store.steampowered.com/search/"
SEARCH_PARAMS = {
    "sort_by": "Price_ASC",
    "supportedlang": "english",
    "specials": "1",
    "ndl": "1",
    "cc": "us",
}
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


def _text(node) -> str:
    return node.get_text(" ", strip=True) if node else ""


def parse_search_results(html: str) -> list[SaleRecord]:
    """
    Extract sale records from a Steam search results page.

    Rows without a discount percentage or a final price are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")
    records = []
    for row in soup.select("a.search_result_row"):
        title = _text(row.select_one(".title"))
        discount = _text(row.select_one(".discount_pct"))
        original = _text(row.select_one(".discount_original_price"))
        final = _text(row.select_one(".discount_final_price"))
        if not title or not discount or not final:
            continue
        records.append(SaleRecord(
            title=title,
            discount=discount,
            original_price=original,
            sale_price=final,
        ))
    return records


class SteamSalesProvider:
    """Client for the public Steam specials listing."""

    def __init__(self, timeout: float = 15.0, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self._client = client

    async def _get_html(self) -> str:
        headers = {"User-Agent": USER_AGENT, "Accept-Language": "en-US,en;q=0.9"}
        if self._client is not None:
            response = await self._client.get(SEARCH_URL, headers=headers,
                                              params=SEARCH_PARAMS, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(SEARCH_URL, headers=headers, params=SEARCH_PARAMS)
        response.raise_for_status()
        return response.text

    async def fetch_current_sales(self) -> list[SaleRecord]:
        """
        Fetch the current specials.

        Returns:
            Sale records in listing order; empty when unavailable.
        """
        try:
            html = await self._get_html()
        except httpx.HTTPError as e:
            logger.error(f"Error fetching Steam sales: {e}")
            return []

        records = parse_search_results(html)
        logger.info(f"Fetched {len(records)} Steam sale records.")
        return records
