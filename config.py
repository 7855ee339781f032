"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Messaging transport (Telegram) ────────────────────────
TRANSPORT_TOKEN: str = os.getenv("TRANSPORT_TOKEN", "")
DEFAULT_CHANNEL_ID: str = os.getenv("DEFAULT_CHANNEL_ID", "")

# ── External data sources ─────────────────────────────────
EXTERNAL_API_KEY: str = os.getenv("EXTERNAL_API_KEY", "")
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "15"))

# ── Shop viewer ───────────────────────────────────────────
VIEWER_LIFETIME_MS: int = int(os.getenv("VIEWER_LIFETIME_MS", "60000"))
SHOP_PAGE_SIZE: int = int(os.getenv("SHOP_PAGE_SIZE", "5"))

# ── Sales tables ──────────────────────────────────────────
SALES_BATCH_SIZE: int = int(os.getenv("SALES_BATCH_SIZE", "20"))

# ── Security ──────────────────────────────────────────────
_raw_ids = os.getenv("ALLOWED_USER_IDS", "")
ALLOWED_USER_IDS: list[int] = (
    [int(uid.strip()) for uid in _raw_ids.split(",") if uid.strip()]
    if _raw_ids
    else []
)

# ── Rate Limiting ─────────────────────────────────────────
RATE_LIMIT_MESSAGES: int = int(os.getenv("RATE_LIMIT_MESSAGES", "10"))
RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
