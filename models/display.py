"""
models/display.py
-----------------
Value objects exchanged between the formatting services and the transport.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class DisplayUnit:
    """One rendered message: HTML text plus an optional preview image."""
    text: str
    image_url: Optional[str] = None


@dataclass(frozen=True)
class MessageRef:
    """Identity of a posted message."""
    chat_id: Union[int, str]
    message_id: int
