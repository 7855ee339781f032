"""
handlers/start_handler.py
--------------------------
Handles /start and /help commands.
"""

import html

from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from security.auth import authorized_only
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🎮 <b>Game Deals Bot</b>

<b>Commands:</b>
<code>!fortnite shop</code> or /shop - today's Fortnite item shop (use ◀️ ▶️ to browse)
<code>!steam sales</code> or /sales - current Steam specials
<code>!check bot</code> or /checkbot - is the bot alive?
<code>!check healthy</code> or /healthy - post a test message to the default channel
/help - show this message
"""


@authorized_only
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - greet the user and show the commands."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")
    await update.message.reply_text(
        f"Hi {html.escape(user.first_name)}! 👋\n{HELP_TEXT}",
        parse_mode=ParseMode.HTML,
    )


@authorized_only
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode=ParseMode.HTML)
