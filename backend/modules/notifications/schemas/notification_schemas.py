# backend/modules/notifications/schemas/notification_schemas.py

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from modules.orders.enums.order_enums import PaymentMethod, DeliveryMethod


class OrderNotification(BaseModel):
    """What the shop needs to know about one freshly placed sandwich"""
    username: str = Field(..., min_length=1)
    phone_number: str
    sandwich: str
    price: Decimal = Field(..., ge=0)
    time: str = Field(..., description="Placement time as displayed to the shop")
    payment_method: PaymentMethod
    note: Optional[str] = None
    delivery_method: DeliveryMethod = DeliveryMethod.PICKUP
    pickup_time: Optional[datetime] = None
    shipping_time: Optional[datetime] = None


class NotificationResult(BaseModel):
    success: bool
    message: str
