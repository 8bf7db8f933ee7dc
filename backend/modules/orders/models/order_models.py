from sqlalchemy import (Column, Integer, String, ForeignKey, DateTime,
                        Numeric, Boolean, JSON, Index, CheckConstraint)
from sqlalchemy.orm import relationship
from core.database import Base
from core.mixins import TimestampMixin
from ..enums.order_enums import OrderStatus, PaymentMethod, DeliveryMethod


class Order(Base, TimestampMixin):
    """
    One sandwich. A cart line with quantity N becomes N orders.

    ``toppings`` is a snapshot of the toppings as they were priced at
    checkout: a list of ``{"id", "name", "price", "category"}`` objects.
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(200), nullable=False)
    phone_number = Column(String(8), nullable=False, index=True)
    bread_id = Column(Integer, ForeignKey("breads.id", ondelete="SET NULL"),
                      nullable=True, index=True)
    is_double_bread = Column(Boolean, nullable=False, default=False)
    toppings = Column(JSON, nullable=False, default=list)
    total_price = Column(Numeric(10, 3), nullable=False)
    status = Column(String(30), nullable=False, index=True,
                    default=OrderStatus.AWAITING_CONFIRMATION.value)
    payment_method = Column(String(10), nullable=False,
                            default=PaymentMethod.CASH.value)
    note = Column(String(50), nullable=True)
    delivery_method = Column(String(10), nullable=False,
                             default=DeliveryMethod.PICKUP.value)
    pickup_time = Column(DateTime, nullable=True)
    shipping_time = Column(DateTime, nullable=True)
    delivered_at = Column(DateTime, nullable=True)

    bread = relationship("Bread", lazy="joined")

    __table_args__ = (
        CheckConstraint("total_price >= 0", name="order_total_price_non_negative"),
        Index("ix_orders_phone_created", "phone_number", "created_at"),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, phone='{self.phone_number}', status='{self.status}')>"
