"""
handlers/ - Presentation Layer
================================
Telegram bot handlers. Each handler receives updates from Telegram,
runs a command flow against the services, and lets `respond` decide what
to tell the user. No formatting or fetching logic lives here.
"""
