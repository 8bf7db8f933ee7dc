# backend/core/clock.py

"""
Wall clock of the shop. Slot availability and the times printed in order
alerts are expressed in the shop's timezone, not the server's.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from .config import settings


def shop_timezone() -> ZoneInfo:
    return ZoneInfo(settings.shop_timezone)


def shop_now() -> datetime:
    """Current time in the shop timezone, without tzinfo attached."""
    return datetime.now(shop_timezone()).replace(tzinfo=None)


def format_shop_time(moment: datetime) -> str:
    """``MM/DD/YYYY, HH:MM:SS`` as shown in order alerts"""
    return moment.strftime("%m/%d/%Y, %H:%M:%S")
