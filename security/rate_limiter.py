"""
security/rate_limiter.py
-------------------------
Per-user rate limiting for commands that hit the external data sources.
"""

import time
from collections import defaultdict
from functools import wraps
from typing import Callable, Optional

from telegram import Update
from telegram.ext import ContextTypes

import config
from utils.logger import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Sliding-window counter of accepted commands per user.

    Attributes:
        limit: Max commands accepted per window.
        window: Window duration in seconds.
    """

    def __init__(self, limit: int, window: float, clock: Callable[[], float] = time.time):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._timestamps: dict[int, list[float]] = defaultdict(list)

    def _cleanup(self, user_id: int, now: float) -> None:
        cutoff = now - self.window
        recent = [t for t in self._timestamps.get(user_id, []) if t > cutoff]
        if recent:
            self._timestamps[user_id] = recent
        else:
            self._timestamps.pop(user_id, None)

    def hit(self, user_id: int) -> bool:
        """Record a command; return False if the user is over the limit."""
        now = self._clock()
        self._cleanup(user_id, now)
        if len(self._timestamps[user_id]) >= self.limit:
            return False
        self._timestamps[user_id].append(now)
        return True

    def reset(self, user_id: Optional[int] = None) -> None:
        if user_id is None:
            self._timestamps.clear()
        else:
            self._timestamps.pop(user_id, None)


limiter = RateLimiter(config.RATE_LIMIT_MESSAGES, config.RATE_LIMIT_WINDOW_SECONDS)


def rate_limited(func: Callable):
    """
    Decorator that enforces `limiter` per user.

    Configuration (via .env):
        RATE_LIMIT_MESSAGES: Max commands per window (default: 10).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 60).
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if not limiter.hit(user.id):
            logger.warning(f"⚠️ Rate limit hit for user {user.id}")
            if update.effective_message:
                await update.effective_message.reply_text(
                    "⚠️ You're sending commands too fast. Please wait a bit and try again."
                )
            return

        return await func(update, context, *args, **kwargs)

    return wrapper
