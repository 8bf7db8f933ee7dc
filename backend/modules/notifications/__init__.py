# backend/modules/notifications/__init__.py

"""
Order alerts sent to the shop's Telegram chat.
"""
