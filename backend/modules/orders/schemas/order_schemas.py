from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from core.translations import Language, TranslationKey, translate
from core.validators import validate_phone_number, validate_required_text
from modules.menu.schemas.menu_schemas import BreadOut
from ..enums.order_enums import OrderStatus, PaymentMethod, DeliveryMethod

ORDER_NOTE_MAX_LENGTH = 50


class OrderTopping(BaseModel):
    """Topping as it was priced when the order was placed"""
    id: int
    name: str
    price: Decimal
    category: Optional[str] = None


class CheckoutItem(BaseModel):
    bread_id: int
    topping_ids: List[int] = []
    is_double_bread: bool = False
    quantity: int = Field(1, ge=1, le=50)


class CheckoutRequest(BaseModel):
    customer_name: str = Field(..., max_length=200)
    phone_number: str
    payment_method: PaymentMethod
    delivery_method: DeliveryMethod = DeliveryMethod.PICKUP
    note: Optional[str] = None
    scheduled_time: Optional[datetime] = None
    language: Language = Language.EN
    items: List[CheckoutItem] = Field(..., min_length=1)

    @field_validator("customer_name")
    @classmethod
    def check_customer_name(cls, v):
        return validate_required_text(v, "Customer name")

    @field_validator("phone_number")
    @classmethod
    def check_phone_number(cls, v):
        return validate_phone_number(v)

    @field_validator("note")
    @classmethod
    def truncate_note(cls, v):
        if v is None:
            return None
        v = v.strip()
        return v[:ORDER_NOTE_MAX_LENGTH] or None


class OrderOut(BaseModel):
    id: int
    customer_name: str
    phone_number: str
    bread_id: Optional[int] = None
    bread: Optional[BreadOut] = None
    is_double_bread: bool
    toppings: List[OrderTopping] = []
    total_price: Decimal
    status: OrderStatus
    status_label: Optional[str] = None
    payment_method: PaymentMethod
    note: Optional[str] = None
    delivery_method: DeliveryMethod
    pickup_time: Optional[datetime] = None
    shipping_time: Optional[datetime] = None
    created_at: datetime
    delivered_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_order(cls, order, language: Optional[Language] = None) -> "OrderOut":
        data = cls.model_validate(order)
        if language is not None:
            data.status_label = translate(TranslationKey(data.status.value), language)
        return data


class CheckoutResponse(BaseModel):
    orders: List[OrderOut]
    total_price: Decimal
    points_balance: Optional[Decimal] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
