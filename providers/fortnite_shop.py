"""
providers/fortnite_shop.py
--------------------------
Fetches the Fortnite daily item shop from fortniteapi.io and normalizes
each shop entry into an `Item`.
"""

from typing import Optional

import httpx

from models.item import Item
from utils.logger import get_logger

logger = get_logger(__name__)

SHOP_URL = "https://fortniteapi.io/v2/shop"

UNKNOWN_NAME = "Unknown Item"
UNKNOWN_PRICE = "Unknown Price"
UNKNOWN_RARITY = "Unknown Rarity"

# Preferred preview image, in order.
_IMAGE_KEYS = ("icon", "featured", "full_background")


def normalize_entry(entry: dict) -> Item:
    """
    Convert one raw shop entry into an `Item`.

    Only the first granted cosmetic is used for the name and image; bundles
    therefore show up under the name of their first component.
    """
    granted = entry.get("granted") or []
    first = granted[0] if granted else {}
    images = first.get("images") or {}

    image_url = None
    for key in _IMAGE_KEYS:
        if images.get(key):
            image_url = images[key]
            break

    return Item(
        name=first.get("name") or UNKNOWN_NAME,
        price=(entry.get("price") or {}).get("finalPrice") or UNKNOWN_PRICE,
        rarity=(entry.get("rarity") or {}).get("name") or UNKNOWN_RARITY,
        image_url=image_url,
    )


class FortniteShopProvider:
    """Client for the fortniteapi.io v2 shop endpoint."""

    def __init__(self, api_key: str, timeout: float = 15.0,
                 client: Optional[httpx.AsyncClient] = None, lang: str = "en"):
        self.api_key = api_key
        self.timeout = timeout
        self.lang = lang
        self._client = client

    async def _get_json(self) -> dict:
        headers = {"Authorization": self.api_key}
        params = {"lang": self.lang}
        if self._client is not None:
            response = await self._client.get(SHOP_URL, headers=headers, params=params,
                                              timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(SHOP_URL, headers=headers, params=params)
        response.raise_for_status()
        return response.json()

    async def fetch_current_catalog(self) -> Optional[list[Item]]:
        """
        Fetch today's shop.

        Returns:
            A list of items in shop order, or None when the shop is
            unavailable (request failed, bad payload, or no entries).
        """
        try:
            data = await self._get_json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching Fortnite shop data: {e}")
            return None

        entries = data.get("shop") if isinstance(data, dict) else None
        if not entries:
            logger.warning("Fortnite shop response contained no entries.")
            return None

        items = [normalize_entry(entry) for entry in entries if isinstance(entry, dict)]
        logger.info(f"Fetched {len(items)} Fortnite shop items.")
        return items or None
