from .timer_models import TimerKind, PickupTimer, ShippingTimer, TIMER_MODELS

__all__ = ["TimerKind", "PickupTimer", "ShippingTimer", "TIMER_MODELS"]
