# backend/modules/timers/services/timer_service.py

"""
Slot management and availability for both timer tables.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from core.clock import shop_now
from core.error_handling import NotFoundError
from ..models.timer_models import TimerKind, TIMER_MODELS
from ..schemas.timer_schemas import TimerSlotCreate, TimerSlotUpdate
from ..utils.availability import (
    PICKUP_CUTOFF_MINUTES,
    SHIPPING_CUTOFF_MINUTES,
    SlotOption,
    day_of_week,
    desired_active_state,
    select_available_slots,
)

logger = logging.getLogger(__name__)

CUTOFF_MINUTES = {
    TimerKind.PICKUP: PICKUP_CUTOFF_MINUTES,
    TimerKind.SHIPPING: SHIPPING_CUTOFF_MINUTES,
}


class TimerService:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _model(kind: TimerKind):
        return TIMER_MODELS[TimerKind(kind)]

    def list_slots(self, kind: TimerKind, day: Optional[int] = None) -> List:
        model = self._model(kind)
        query = self.db.query(model)
        if day is not None:
            query = query.filter(model.day_of_week == day)
        return query.order_by(model.day_of_week, model.time).all()

    def get_slot(self, kind: TimerKind, slot_id: int):
        model = self._model(kind)
        slot = self.db.query(model).filter(model.id == slot_id).first()
        if not slot:
            raise NotFoundError(f"{TimerKind(kind).value.capitalize()} timer", slot_id)
        return slot

    def create_slot(self, kind: TimerKind, data: TimerSlotCreate):
        slot = self._model(kind)(**data.model_dump())
        self.db.add(slot)
        self.db.commit()
        self.db.refresh(slot)
        logger.info(f"Created {TimerKind(kind).value} timer {slot.id}")
        return slot

    def update_slot(self, kind: TimerKind, slot_id: int, data: TimerSlotUpdate):
        slot = self.get_slot(kind, slot_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(slot, field, value)
        self.db.commit()
        self.db.refresh(slot)
        return slot

    def delete_slot(self, kind: TimerKind, slot_id: int) -> None:
        slot = self.get_slot(kind, slot_id)
        self.db.delete(slot)
        self.db.commit()
        logger.info(f"Deleted {TimerKind(kind).value} timer {slot_id}")

    def available_slots(
        self,
        kind: TimerKind,
        now: Optional[datetime] = None,
        cutoff_minutes: Optional[int] = None,
    ) -> List[SlotOption]:
        """
        Slots selectable right now.

        Today's active flags are refreshed first, so a slot switched off
        inside its preparation window shows up again once its time arrives.
        The cutoff defaults to the one of the timer kind; a custom value adds
        its own window on top of the refreshed flags.
        """
        now = now or shop_now()
        if cutoff_minutes is None:
            cutoff_minutes = CUTOFF_MINUTES[TimerKind(kind)]
        self.recompute_active_flags(kind, now)
        slots = self.list_slots(kind, day=day_of_week(now))
        return select_available_slots(slots, now, cutoff_minutes)

    def recompute_active_flags(
        self, kind: TimerKind, now: Optional[datetime] = None
    ) -> int:
        """
        Store the active flag of today's slots as dictated by the clock.
        Only slots whose flag changes are written. Returns how many changed.
        """
        now = now or shop_now()
        cutoff = CUTOFF_MINUTES[TimerKind(kind)]
        changed = 0
        for slot in self.list_slots(kind, day=day_of_week(now)):
            desired = desired_active_state(slot.time, now, cutoff)
            if slot.active != desired:
                slot.active = desired
                changed += 1
        if changed:
            self.db.commit()
        logger.info(
            f"Recomputed {TimerKind(kind).value} timers at {now:%H:%M}: {changed} changed"
        )
        return changed

    def recompute_all(self, now: Optional[datetime] = None) -> Dict[str, int]:
        now = now or shop_now()
        return {kind.value: self.recompute_active_flags(kind, now) for kind in TimerKind}
