# backend/modules/loyalty/services/loyalty_service.py

"""
Core service for loyalty points.

Every balance change is a single conditional UPDATE on ``loyalty_points``
followed by an entry in ``points_transactions``, so that the cached balance
always equals the sum of the logged amounts for the phone number.
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import func, desc, Numeric
from typing import List, Optional, Tuple
from decimal import Decimal, ROUND_HALF_UP
import logging

from core.error_handling import (
    NotFoundError,
    InsufficientPointsError,
    PersistenceError,
)
from core.validators import validate_phone_number
from modules.orders.enums.order_enums import OrderStatus, PaymentMethod
from modules.orders.models.order_models import Order
from ..models.loyalty_models import (
    LoyaltyAccount,
    PointsTransaction,
    PointsTransactionType,
)

logger = logging.getLogger(__name__)

# Points earned per currency unit spent on a delivered cash order
POINTS_EARN_RATE = Decimal("0.05")
# One point pays for one currency unit at checkout
POINTS_PER_CURRENCY_UNIT = Decimal("1")

POINTS_QUANTUM = Decimal("0.001")

REDEEM_REASON = "Redeem at checkout"
EARN_REASON = "Order delivered"
ADMIN_ADD_REASON = "Admin manual add"
ADMIN_SUBTRACT_REASON = "Admin manual subtract"


def to_points(value) -> Decimal:
    """Normalize an amount to the precision points are stored with."""
    return Decimal(str(value)).quantize(POINTS_QUANTUM, rounding=ROUND_HALF_UP)


def points_for_price(price) -> Decimal:
    return to_points(Decimal(str(price)) * POINTS_PER_CURRENCY_UNIT)


def earned_points_for_price(price) -> Decimal:
    return to_points(Decimal(str(price)) * POINTS_EARN_RATE)


def _rounded(expression):
    """Round a balance expression in SQL; some backends store points as floats."""
    return func.round(expression, 3, type_=Numeric(12, 3))


class LoyaltyService:
    """Service for managing loyalty balances and their transaction log"""

    def __init__(self, db: Session):
        self.db = db

    # ========== Accounts ==========

    def find_account(self, phone_number: str) -> Optional[LoyaltyAccount]:
        return (
            self.db.query(LoyaltyAccount)
            .populate_existing()
            .filter(LoyaltyAccount.phone_number == phone_number)
            .first()
        )

    def get_account(self, phone_number: str) -> LoyaltyAccount:
        account = self.find_account(phone_number)
        if not account:
            raise NotFoundError("Loyalty account", phone_number)
        return account

    def list_accounts(self, search: Optional[str] = None) -> List[LoyaltyAccount]:
        query = self.db.query(LoyaltyAccount)
        if search:
            query = query.filter(LoyaltyAccount.phone_number.startswith(search.strip()))
        return query.order_by(desc(LoyaltyAccount.updated_at)).all()

    # ========== Balance primitives ==========

    def create_or_update_loyalty_points(
        self,
        phone_number: str,
        customer_name: str,
        points_delta,
        commit: bool = True,
    ) -> LoyaltyAccount:
        """
        Add ``points_delta`` to the balance of ``phone_number``, creating the
        account when it does not exist yet. The stored customer name is
        refreshed on every call.

        Does not log a transaction; callers log the entry matching their
        operation.
        """
        delta = to_points(points_delta)
        if delta < 0:
            raise ValueError("Use a debit operation to remove points")

        if not self._increment(phone_number, customer_name, delta):
            try:
                with self.db.begin_nested():
                    self.db.add(
                        LoyaltyAccount(
                            phone_number=phone_number,
                            customer_name=customer_name,
                            total_points=delta,
                        )
                    )
                logger.info(f"Loyalty account created for {phone_number}")
            except IntegrityError:
                # Created concurrently; the row exists now
                logger.info(f"Loyalty account for {phone_number} appeared concurrently")
                self._increment(phone_number, customer_name, delta)

        if commit:
            self.db.commit()
        return self.get_account(phone_number)

    def _increment(self, phone_number: str, customer_name: str, delta: Decimal) -> bool:
        updated = (
            self.db.query(LoyaltyAccount)
            .filter(LoyaltyAccount.phone_number == phone_number)
            .update(
                {
                    LoyaltyAccount.total_points: _rounded(LoyaltyAccount.total_points + delta),
                    LoyaltyAccount.customer_name: customer_name,
                },
                synchronize_session=False,
            )
        )
        return updated > 0

    def _debit(self, phone_number: str, amount: Decimal) -> None:
        """Remove points only if the balance covers them, in one statement."""
        updated = (
            self.db.query(LoyaltyAccount)
            .filter(
                LoyaltyAccount.phone_number == phone_number,
                _rounded(LoyaltyAccount.total_points) >= amount,
            )
            .update(
                {LoyaltyAccount.total_points: _rounded(LoyaltyAccount.total_points - amount)},
                synchronize_session=False,
            )
        )
        if updated == 0:
            account = self.find_account(phone_number)
            available = account.total_points if account else None
            logger.warning(
                f"Insufficient points for {phone_number}: "
                f"available={available}, requested={amount}"
            )
            raise InsufficientPointsError(available=available, requested=amount)

    def log_transaction(
        self,
        phone_number: str,
        amount,
        transaction_type: PointsTransactionType,
        reason: Optional[str] = None,
        related_order_id: Optional[int] = None,
    ) -> PointsTransaction:
        transaction = PointsTransaction(
            phone_number=phone_number,
            amount=to_points(amount),
            type=PointsTransactionType(transaction_type).value,
            reason=reason,
            related_order_id=related_order_id,
        )
        self.db.add(transaction)
        self.db.flush()
        return transaction

    # ========== Spend / earn ==========

    def redeem_points(
        self,
        phone_number: str,
        amount,
        reason: str = REDEEM_REASON,
        related_order_id: Optional[int] = None,
        commit: bool = True,
    ) -> LoyaltyAccount:
        """
        Spend points. Raises InsufficientPointsError, leaving the balance
        untouched, when the account is missing or holds less than ``amount``.
        """
        amount = to_points(amount)
        if amount <= 0:
            raise ValueError("Points to redeem must be greater than zero")

        self._debit(phone_number, amount)
        self.log_transaction(
            phone_number,
            -amount,
            PointsTransactionType.SPEND,
            reason=reason,
            related_order_id=related_order_id,
        )
        if commit:
            self.db.commit()
        logger.info(f"Redeemed {amount} points for {phone_number}")
        return self.get_account(phone_number)

    def award_points_for_delivered_order(
        self, order: Order, commit: bool = True
    ) -> Optional[PointsTransaction]:
        """
        Credit the customer for a delivered order. Orders paid with points
        earn nothing.
        """
        if order.payment_method != PaymentMethod.CASH.value:
            logger.info(f"Order {order.id} was paid with points; no points earned")
            return None

        points = earned_points_for_price(order.total_price)
        if points <= 0:
            return None

        self.create_or_update_loyalty_points(
            order.phone_number, order.customer_name, points, commit=False
        )
        transaction = self.log_transaction(
            order.phone_number,
            points,
            PointsTransactionType.EARN,
            reason=EARN_REASON,
            related_order_id=order.id,
        )
        if commit:
            self.db.commit()
        logger.info(
            f"Awarded {points} points to {order.phone_number} for order {order.id}"
        )
        return transaction

    # ========== Admin adjustments ==========

    def admin_adjust_points(
        self, phone_number: str, customer_name: str, amount
    ) -> Tuple[LoyaltyAccount, PointsTransaction]:
        """Manual top-up from the admin dashboard."""
        phone_number = validate_phone_number(phone_number)
        amount = to_points(amount)
        if amount <= 0:
            raise ValueError("Amount must be greater than zero")

        try:
            self.create_or_update_loyalty_points(
                phone_number, customer_name, amount, commit=False
            )
            transaction = self.log_transaction(
                phone_number,
                amount,
                PointsTransactionType.ADJUSTMENT_ADD,
                reason=ADMIN_ADD_REASON,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to add points for {phone_number}: {str(e)}")
            raise PersistenceError("Failed to update loyalty points")

        logger.info(f"Admin added {amount} points to {phone_number}")
        return self.get_account(phone_number), transaction

    def admin_deduct_points(
        self, phone_number: str, amount
    ) -> Tuple[LoyaltyAccount, PointsTransaction]:
        """Manual removal; never takes a balance below zero."""
        phone_number = validate_phone_number(phone_number)
        amount = to_points(amount)
        if amount <= 0:
            raise ValueError("Amount must be greater than zero")

        try:
            self._debit(phone_number, amount)
            transaction = self.log_transaction(
                phone_number,
                -amount,
                PointsTransactionType.ADJUSTMENT_SUBTRACT,
                reason=ADMIN_SUBTRACT_REASON,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to subtract points for {phone_number}: {str(e)}")
            raise PersistenceError("Failed to update loyalty points")

        logger.info(f"Admin subtracted {amount} points from {phone_number}")
        return self.get_account(phone_number), transaction

    # ========== History ==========

    def list_transactions(
        self, phone_number: str, limit: Optional[int] = None
    ) -> List[PointsTransaction]:
        query = (
            self.db.query(PointsTransaction)
            .filter(PointsTransaction.phone_number == phone_number)
            .order_by(desc(PointsTransaction.created_at), desc(PointsTransaction.id))
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def get_customer_activity(self, phone_number: str) -> dict:
        """Balance, orders and points history for one phone number."""
        phone_number = validate_phone_number(phone_number)
        account = self.find_account(phone_number)
        orders = (
            self.db.query(Order)
            .filter(Order.phone_number == phone_number)
            .order_by(desc(Order.created_at), desc(Order.id))
            .all()
        )
        transactions = self.list_transactions(phone_number)

        spent_cash = sum(
            (
                Decimal(str(o.total_price))
                for o in orders
                if o.payment_method == PaymentMethod.CASH.value
                and o.status == OrderStatus.DELIVERED.value
            ),
            Decimal("0"),
        )
        spent_points = sum(
            (abs(t.amount) for t in transactions if t.type == PointsTransactionType.SPEND.value),
            Decimal("0"),
        )
        earned_points = sum(
            (t.amount for t in transactions if t.type == PointsTransactionType.EARN.value),
            Decimal("0"),
        )

        customer_name = account.customer_name if account else None
        if customer_name is None and orders:
            customer_name = orders[0].customer_name

        return {
            "phone_number": phone_number,
            "customer_name": customer_name,
            "total_points": account.total_points if account else Decimal("0"),
            "spent_cash": to_points(spent_cash),
            "spent_points": to_points(spent_points),
            "earned_points": to_points(earned_points),
            "orders": orders,
            "transactions": transactions,
        }

    def check_consistency(self, phone_number: str) -> dict:
        """Compare the cached balance with the sum of logged amounts."""
        account = self.find_account(phone_number)
        ledger_sum = (
            self.db.query(func.coalesce(func.sum(PointsTransaction.amount), 0))
            .filter(PointsTransaction.phone_number == phone_number)
            .scalar()
        )
        cached = to_points(account.total_points if account else 0)
        ledger = to_points(ledger_sum)
        if cached != ledger:
            logger.warning(
                f"Loyalty balance mismatch for {phone_number}: "
                f"cached={cached}, ledger={ledger}"
            )
        return {
            "phone_number": phone_number,
            "cached_balance": cached,
            "ledger_balance": ledger,
            "consistent": cached == ledger,
        }
