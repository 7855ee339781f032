"""
security/auth.py
-----------------
Guards handlers against updates the bot must not act on: anything sent
by another bot, and users outside the optional whitelist.
"""

from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

import config
from utils.logger import get_logger

logger = get_logger(__name__)


def is_allowed(user_id: int) -> bool:
    """An empty whitelist allows everyone."""
    return not config.ALLOWED_USER_IDS or user_id in config.ALLOWED_USER_IDS


def authorized_only(func: Callable):
    """
    Decorator that drops updates from bots and non-whitelisted users.

    Usage:
        @authorized_only
        async def my_handler(update, context):
            ...

    Behavior:
        - Updates without a user, or sent by a bot, are ignored silently.
        - If ALLOWED_USER_IDS is set, other users are refused and logged.
        - Works for both messages and button presses.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user or user.is_bot:
            return

        if is_allowed(user.id):
            return await func(update, context, *args, **kwargs)

        logger.warning(
            f"🚫 Unauthorized access attempt: user_id={user.id}, "
            f"username={user.username}, name={user.first_name}"
        )
        if update.callback_query:
            await update.callback_query.answer("⛔ This bot is private.")
        elif update.effective_message:
            await update.effective_message.reply_text("⛔ Sorry, this bot is private.")

    return wrapper
