# backend/modules/timers/schemas/timer_schemas.py

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from ..utils.availability import parse_slot_time


def _normalize_time(v: str) -> str:
    try:
        parsed = parse_slot_time(v)
    except ValueError:
        raise ValueError("time must be HH:MM")
    return parsed.strftime("%H:%M")


class TimerSlotCreate(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday")
    time: str
    active: bool = True

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return _normalize_time(v)


class TimerSlotUpdate(BaseModel):
    day_of_week: Optional[int] = Field(None, ge=0, le=6)
    time: Optional[str] = None
    active: Optional[bool] = None

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return _normalize_time(v) if v is not None else v


class TimerSlotOut(BaseModel):
    id: int
    day_of_week: int
    time: str
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SlotOptionOut(BaseModel):
    id: int
    time: str
    scheduled_at: datetime

    class Config:
        from_attributes = True


class RecomputeResult(BaseModel):
    changed: Dict[str, int]
    evaluated_at: datetime
