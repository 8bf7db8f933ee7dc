# backend/modules/loyalty/routes/loyalty_routes.py

"""
Routes for loyalty balances, history and admin adjustments.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from core.auth import get_current_admin
from core.database import get_db
from core.error_handling import handle_api_errors
from core.translations import Language
from core.validators import validate_phone_number
from modules.auth.models.admin_models import AdminUser
from modules.orders.schemas.order_schemas import OrderOut

from ..services.loyalty_service import LoyaltyService
from ..schemas.loyalty_schemas import (
    LoyaltyAccountOut,
    PointsTransactionOut,
    PointsAdjustment,
    PointsDeduction,
    PointsAdjustmentResponse,
    ConsistencyReport,
    CustomerActivity,
)

router = APIRouter(prefix="/api/loyalty", tags=["Loyalty"])


def get_loyalty_service(db: Session = Depends(get_db)) -> LoyaltyService:
    """Dependency to get loyalty service instance"""
    return LoyaltyService(db)


# ========== Admin ==========


@router.get("", response_model=List[LoyaltyAccountOut])
@handle_api_errors
async def list_loyalty_accounts(
    search: Optional[str] = Query(None, description="Phone number prefix"),
    loyalty_service: LoyaltyService = Depends(get_loyalty_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return loyalty_service.list_accounts(search)


@router.post("/adjust", response_model=PointsAdjustmentResponse)
@handle_api_errors
async def add_points(
    adjustment: PointsAdjustment,
    loyalty_service: LoyaltyService = Depends(get_loyalty_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Manually add points to a customer"""
    account, transaction = loyalty_service.admin_adjust_points(
        adjustment.phone_number, adjustment.customer_name, adjustment.amount
    )
    return PointsAdjustmentResponse(
        account=LoyaltyAccountOut.model_validate(account),
        transaction=PointsTransactionOut.model_validate(transaction),
    )


@router.post("/deduct", response_model=PointsAdjustmentResponse)
@handle_api_errors
async def deduct_points(
    adjustment: PointsDeduction,
    loyalty_service: LoyaltyService = Depends(get_loyalty_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    """Manually remove points from a customer"""
    account, transaction = loyalty_service.admin_deduct_points(
        adjustment.phone_number, adjustment.amount
    )
    return PointsAdjustmentResponse(
        account=LoyaltyAccountOut.model_validate(account),
        transaction=PointsTransactionOut.model_validate(transaction),
    )


@router.get("/{phone_number}/consistency", response_model=ConsistencyReport)
@handle_api_errors
async def check_points_consistency(
    phone_number: str,
    loyalty_service: LoyaltyService = Depends(get_loyalty_service),
    current_admin: AdminUser = Depends(get_current_admin),
):
    return loyalty_service.check_consistency(validate_phone_number(phone_number))


# ========== Customer ==========


@router.get("/{phone_number}", response_model=LoyaltyAccountOut)
@handle_api_errors
async def get_loyalty_account(
    phone_number: str,
    loyalty_service: LoyaltyService = Depends(get_loyalty_service),
):
    return loyalty_service.get_account(validate_phone_number(phone_number))


@router.get("/{phone_number}/transactions", response_model=List[PointsTransactionOut])
@handle_api_errors
async def list_points_transactions(
    phone_number: str,
    limit: Optional[int] = Query(None, ge=1, le=500),
    loyalty_service: LoyaltyService = Depends(get_loyalty_service),
):
    return loyalty_service.list_transactions(validate_phone_number(phone_number), limit)


@router.get("/{phone_number}/activity", response_model=CustomerActivity)
@handle_api_errors
async def get_customer_activity(
    phone_number: str,
    lang: Optional[Language] = Query(None),
    loyalty_service: LoyaltyService = Depends(get_loyalty_service),
):
    """Balance, spending totals, orders and points history"""
    activity = loyalty_service.get_customer_activity(phone_number)
    activity["orders"] = [OrderOut.from_order(o, lang) for o in activity["orders"]]
    activity["transactions"] = [
        PointsTransactionOut.model_validate(t) for t in activity["transactions"]
    ]
    return CustomerActivity(**activity)
