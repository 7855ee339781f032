"""
models/item.py
--------------
Domain models for the two external catalogs: shop items and sale records.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Item:
    """
    A purchasable entry from the Fortnite item shop.

    Attributes:
        name: Display name of the first granted cosmetic.
        price: Final price in V-Bucks, or a placeholder string when unknown.
        rarity: Rarity label (e.g., 'Epic').
        image_url: Preview image, if the shop entry carries one.
    """
    name: str
    price: Union[int, str]
    rarity: str
    image_url: Optional[str] = None


@dataclass(frozen=True)
class SaleRecord:
    """A discounted product from the Steam specials listing."""
    title: str
    discount: str
    original_price: str
    sale_price: str
