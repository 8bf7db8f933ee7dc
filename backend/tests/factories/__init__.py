# backend/tests/factories/__init__.py

"""
Shared test factories for the Kaskroutek backend.

These factories provide reusable test data generation for all modules.
"""

from .base import BaseFactory
from .auth import AdminUserFactory, DEFAULT_PASSWORD
from .menu import BreadFactory, ToppingFactory
from .order import OrderFactory
from .loyalty import LoyaltyAccountFactory, PointsTransactionFactory
from .timers import PickupTimerFactory, ShippingTimerFactory

__all__ = [
    # Base
    'BaseFactory',

    # Auth
    'AdminUserFactory',
    'DEFAULT_PASSWORD',

    # Menu
    'BreadFactory',
    'ToppingFactory',

    # Order
    'OrderFactory',

    # Loyalty
    'LoyaltyAccountFactory',
    'PointsTransactionFactory',

    # Timers
    'PickupTimerFactory',
    'ShippingTimerFactory',
]
