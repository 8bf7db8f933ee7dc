"""
Order reads and admin status changes.
"""

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import desc, func
from typing import List, Optional
import logging

from core.error_handling import NotFoundError, PersistenceError
from modules.loyalty.services.loyalty_service import LoyaltyService
from ..enums.order_enums import OrderStatus
from ..models.order_models import Order

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, db: Session):
        self.db = db
        self.loyalty_service = LoyaltyService(db)

    def get_order(self, order_id: int) -> Order:
        order = self.db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFoundError("Order", order_id)
        return order

    def list_orders(
        self,
        status: Optional[OrderStatus] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Order]:
        query = self.db.query(Order)
        if status:
            query = query.filter(Order.status == OrderStatus(status).value)
        return (
            query.order_by(desc(Order.created_at), desc(Order.id))
            .offset(offset)
            .limit(limit)
            .all()
        )

    def list_orders_by_phone(self, phone_number: str) -> List[Order]:
        return (
            self.db.query(Order)
            .filter(Order.phone_number == phone_number)
            .order_by(desc(Order.created_at), desc(Order.id))
            .all()
        )

    def transition_order_status(self, order_id: int, new_status: OrderStatus) -> Order:
        """
        Move an order to any status. The first time an order reaches
        ``delivered`` its delivery time is stamped and, for cash orders, the
        customer earns points. Later deliveries of the same order award
        nothing.
        """
        new_status = OrderStatus(new_status)
        order = self.get_order(order_id)
        previous_status = order.status

        if previous_status == new_status.value:
            logger.info(f"Order {order_id} already {new_status.value}; nothing to do")
            return order

        try:
            first_delivery = False
            if new_status == OrderStatus.DELIVERED:
                # Only one caller can stamp delivered_at
                first_delivery = (
                    self.db.query(Order)
                    .filter(Order.id == order_id, Order.delivered_at.is_(None))
                    .update(
                        {
                            Order.status: new_status.value,
                            Order.delivered_at: func.now(),
                        },
                        synchronize_session=False,
                    )
                    == 1
                )
            if not first_delivery:
                self.db.query(Order).filter(Order.id == order_id).update(
                    {Order.status: new_status.value}, synchronize_session=False
                )

            self.db.flush()
            self.db.refresh(order)

            if first_delivery:
                self.loyalty_service.award_points_for_delivered_order(order, commit=False)

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update order {order_id}: {str(e)}")
            raise PersistenceError("Failed to update order status", {"order_id": order_id})

        self.db.refresh(order)
        logger.info(
            f"Order {order_id} status changed from {previous_status} to {new_status.value}"
        )
        return order

    def cancel_order(self, order_id: int) -> Order:
        return self.transition_order_status(order_id, OrderStatus.CANCELLED)

    def uncancel_order(self, order_id: int) -> Order:
        """Bring a cancelled order back as confirmed. Points are not touched."""
        order = self.get_order(order_id)
        if order.status != OrderStatus.CANCELLED.value:
            raise ValueError("Only cancelled orders can be restored")
        return self.transition_order_status(order_id, OrderStatus.CONFIRMED)
