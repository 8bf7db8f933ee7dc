# backend/tests/factories/order.py

from decimal import Decimal

from factory import Faker, SubFactory

from modules.orders.enums.order_enums import OrderStatus, PaymentMethod, DeliveryMethod
from modules.orders.models.order_models import Order
from .base import BaseFactory
from .menu import BreadFactory


class OrderFactory(BaseFactory):
    """Factory for creating single-sandwich orders."""

    class Meta:
        model = Order

    customer_name = Faker("name")
    phone_number = "22123456"
    bread = SubFactory(BreadFactory)
    is_double_bread = False
    toppings = []
    total_price = Decimal("10.000")
    status = OrderStatus.AWAITING_CONFIRMATION.value
    payment_method = PaymentMethod.CASH.value
    delivery_method = DeliveryMethod.PICKUP.value
    note = None
