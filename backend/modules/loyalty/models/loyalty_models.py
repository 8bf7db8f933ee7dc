# backend/modules/loyalty/models/loyalty_models.py

"""
Loyalty points models: the cached balance per phone number and the
append-only log of every change made to it.
"""

from enum import Enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Numeric,
    ForeignKey,
    CheckConstraint,
    Index,
)
from core.database import Base
from core.mixins import TimestampMixin, CreatedAtMixin


class PointsTransactionType(str, Enum):
    EARN = "earn"
    SPEND = "spend"
    ADJUSTMENT_ADD = "adjustment_add"
    ADJUSTMENT_SUBTRACT = "adjustment_subtract"


class LoyaltyAccount(Base, TimestampMixin):
    """Points balance of one customer, keyed by phone number"""
    __tablename__ = "loyalty_points"

    id = Column(Integer, primary_key=True, index=True)
    phone_number = Column(String(8), nullable=False, unique=True, index=True)
    customer_name = Column(String(200), nullable=False)
    total_points = Column(Numeric(12, 3), nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("total_points >= 0", name="loyalty_points_non_negative"),
    )

    def __repr__(self):
        return f"<LoyaltyAccount(phone='{self.phone_number}', points={self.total_points})>"


class PointsTransaction(Base, CreatedAtMixin):
    """Immutable log entry; amount is negative for spend and subtract"""
    __tablename__ = "points_transactions"

    id = Column(Integer, primary_key=True, index=True)
    phone_number = Column(String(8), nullable=False, index=True)
    amount = Column(Numeric(12, 3), nullable=False)
    type = Column(String(30), nullable=False, index=True)
    reason = Column(String(200), nullable=True)
    related_order_id = Column(
        Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True, index=True
    )

    __table_args__ = (
        Index("ix_points_transactions_phone_created", "phone_number", "created_at"),
    )

    def __repr__(self):
        return (
            f"<PointsTransaction(phone='{self.phone_number}', type='{self.type}', "
            f"amount={self.amount})>"
        )
