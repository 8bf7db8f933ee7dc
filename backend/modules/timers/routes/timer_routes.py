# backend/modules/timers/routes/timer_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from core.auth import get_current_admin
from core.clock import shop_now
from core.database import get_db
from core.error_handling import handle_api_errors
from modules.auth.models.admin_models import AdminUser

from ..models.timer_models import TimerKind
from ..schemas.timer_schemas import (
    TimerSlotCreate, TimerSlotUpdate, TimerSlotOut, SlotOptionOut, RecomputeResult,
)
from ..services.timer_service import TimerService


router = APIRouter(prefix="/api/timers", tags=["Timers"])


def get_timer_service(db: Session = Depends(get_db)) -> TimerService:
    """Dependency to get timer service instance"""
    return TimerService(db)


@router.post("/recompute", response_model=RecomputeResult)
@handle_api_errors
async def recompute_timers(
    timer_service: TimerService = Depends(get_timer_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Refresh today's active flags of pickup and shipping slots"""
    now = shop_now()
    return RecomputeResult(changed=timer_service.recompute_all(now), evaluated_at=now)


@router.get("/{kind}/available", response_model=List[SlotOptionOut])
@handle_api_errors
async def list_available_slots(
    kind: TimerKind,
    cutoff_minutes: Optional[int] = Query(
        None, ge=0, description="Extra preparation window in minutes on top of the slot flags"
    ),
    timer_service: TimerService = Depends(get_timer_service),
):
    """Slots a customer can still pick today, earliest first"""
    return timer_service.available_slots(kind, cutoff_minutes=cutoff_minutes)


@router.get("/{kind}", response_model=List[TimerSlotOut])
@handle_api_errors
async def list_slots(
    kind: TimerKind,
    day: Optional[int] = Query(None, ge=0, le=6, description="0 = Sunday"),
    timer_service: TimerService = Depends(get_timer_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return timer_service.list_slots(kind, day)


@router.post("/{kind}", response_model=TimerSlotOut, status_code=status.HTTP_201_CREATED)
@handle_api_errors
async def create_slot(
    kind: TimerKind,
    slot_data: TimerSlotCreate,
    timer_service: TimerService = Depends(get_timer_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return timer_service.create_slot(kind, slot_data)


@router.patch("/{kind}/{slot_id}", response_model=TimerSlotOut)
@handle_api_errors
async def update_slot(
    kind: TimerKind,
    slot_id: int,
    slot_data: TimerSlotUpdate,
    timer_service: TimerService = Depends(get_timer_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return timer_service.update_slot(kind, slot_id, slot_data)


@router.delete("/{kind}/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_api_errors
async def delete_slot(
    kind: TimerKind,
    slot_id: int,
    timer_service: TimerService = Depends(get_timer_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    timer_service.delete_slot(kind, slot_id)
