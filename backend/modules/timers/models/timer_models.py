# backend/modules/timers/models/timer_models.py

from enum import Enum

from sqlalchemy import Column, Integer, String, Boolean

from core.database import Base
from core.mixins import TimestampMixin


class TimerKind(str, Enum):
    PICKUP = "pickup"
    SHIPPING = "shipping"


class TimerSlotMixin:
    """A weekly slot: day of week (0 = Sunday) and a time of day"""

    id = Column(Integer, primary_key=True, index=True)
    day_of_week = Column(Integer, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM
    active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return (
            f"<{type(self).__name__}(id={self.id}, day={self.day_of_week}, "
            f"time='{self.time}', active={self.active})>"
        )


class PickupTimer(Base, TimerSlotMixin, TimestampMixin):
    __tablename__ = "shipping_timers"


class ShippingTimer(Base, TimerSlotMixin, TimestampMixin):
    __tablename__ = "shipping_timers_delivery"


TIMER_MODELS = {
    TimerKind.PICKUP: PickupTimer,
    TimerKind.SHIPPING: ShippingTimer,
}
