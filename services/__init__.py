"""
services/ - Business Layer
==========================
Formatting, pagination and batch sending. Services talk to Telegram only
through `TelegramTransport` and never see `Update` objects.
"""
