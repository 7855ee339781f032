"""
security/ - Handler Guards
==========================
Decorators applied to Telegram handlers before any service is called.
"""
