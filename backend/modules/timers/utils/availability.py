# backend/modules/timers/utils/availability.py

"""
Which slots can still be chosen today.

A slot is hidden while the kitchen no longer has time to get the order
ready (strictly inside the cutoff window before it) and once it has passed.
A slot whose time is exactly now stays selectable.
"""

from dataclasses import dataclass
from datetime import datetime, time
from typing import Iterable, List, Optional

PICKUP_CUTOFF_MINUTES = 30
SHIPPING_CUTOFF_MINUTES = 60


@dataclass(frozen=True)
class SlotOption:
    id: int
    time: str
    scheduled_at: datetime


def parse_slot_time(value: str) -> time:
    """Parse ``HH:MM`` (seconds are accepted and ignored)."""
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid slot time '{value}', expected HH:MM")
    hour, minute = int(parts[0]), int(parts[1])
    return time(hour=hour, minute=minute)


def day_of_week(moment: datetime) -> int:
    """0 = Sunday ... 6 = Saturday"""
    return moment.isoweekday() % 7


def slot_datetime(slot_time: str, now: datetime) -> datetime:
    return datetime.combine(now.date(), parse_slot_time(slot_time))


def minutes_until_slot(slot_time: str, now: datetime) -> float:
    return (slot_datetime(slot_time, now) - now).total_seconds() / 60


def is_within_cutoff(diff_minutes: float, cutoff_minutes: int) -> bool:
    return 0 < diff_minutes < cutoff_minutes


def desired_active_state(slot_time: str, now: datetime, cutoff_minutes: int) -> bool:
    return not is_within_cutoff(minutes_until_slot(slot_time, now), cutoff_minutes)


def select_available_slots(
    slots: Iterable, now: datetime, cutoff_minutes: Optional[int] = None
) -> List[SlotOption]:
    """
    Slots of today that are active and still ahead, sorted by time.

    ``slots`` are objects with ``id``, ``day_of_week``, ``time`` and
    ``active``. Without a cutoff only past slots are dropped.
    """
    today = day_of_week(now)
    options = []
    for slot in slots:
        if slot.day_of_week != today or not slot.active:
            continue
        diff = minutes_until_slot(slot.time, now)
        if diff < 0:
            continue
        if cutoff_minutes and is_within_cutoff(diff, cutoff_minutes):
            continue
        options.append(
            SlotOption(
                id=slot.id,
                time=parse_slot_time(slot.time).strftime("%H:%M"),
                scheduled_at=slot_datetime(slot.time, now),
            )
        )
    return sorted(options, key=lambda option: option.scheduled_at)
