# backend/tests/factories/timers.py

from modules.timers.models.timer_models import PickupTimer, ShippingTimer
from .base import BaseFactory


class PickupTimerFactory(BaseFactory):
    class Meta:
        model = PickupTimer

    day_of_week = 1
    time = "12:00"
    active = True


class ShippingTimerFactory(BaseFactory):
    class Meta:
        model = ShippingTimer

    day_of_week = 1
    time = "12:00"
    active = True
