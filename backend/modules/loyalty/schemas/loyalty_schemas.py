# backend/modules/loyalty/schemas/loyalty_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from core.validators import validate_phone_number, validate_required_text
from modules.orders.schemas.order_schemas import OrderOut
from ..models.loyalty_models import PointsTransactionType


class LoyaltyAccountOut(BaseModel):
    id: int
    phone_number: str
    customer_name: str
    total_points: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PointsTransactionOut(BaseModel):
    id: int
    phone_number: str
    amount: Decimal
    type: PointsTransactionType
    reason: Optional[str] = None
    related_order_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class PointsDeduction(BaseModel):
    """Manual points removal made from the admin dashboard"""
    phone_number: str
    amount: Decimal = Field(..., gt=0)

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, v):
        return validate_phone_number(v)


class PointsAdjustment(PointsDeduction):
    """Manual top-up; creates the account when needed"""
    customer_name: str = Field(..., max_length=200)

    @field_validator("customer_name")
    @classmethod
    def check_customer_name(cls, v):
        return validate_required_text(v, "Customer name")


class PointsAdjustmentResponse(BaseModel):
    account: LoyaltyAccountOut
    transaction: PointsTransactionOut


class ConsistencyReport(BaseModel):
    phone_number: str
    cached_balance: Decimal
    ledger_balance: Decimal
    consistent: bool


class CustomerActivity(BaseModel):
    """Everything a customer sees on their loyalty page"""
    phone_number: str
    customer_name: Optional[str] = None
    total_points: Decimal
    spent_cash: Decimal
    spent_points: Decimal
    earned_points: Decimal
    orders: List[OrderOut] = []
    transactions: List[PointsTransactionOut] = []
