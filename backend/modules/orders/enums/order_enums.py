from enum import Enum


class OrderStatus(str, Enum):
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CONFIRMED = "confirmed"
    IN_PREPARATION = "in_preparation"
    DELIVERY = "delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CASH = "cash"
    POINTS = "points"


class DeliveryMethod(str, Enum):
    PICKUP = "pickup"
    SHIPPING = "shipping"
