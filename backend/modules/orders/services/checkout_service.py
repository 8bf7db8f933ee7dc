"""
Checkout: turns a cart into orders and redeems points when the customer
pays with them.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional
import logging

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from core.clock import format_shop_time, shop_now
from core.error_handling import InsufficientPointsError, OrderPersistenceError
from modules.loyalty.services.loyalty_service import LoyaltyService, points_for_price
from modules.menu.models.menu_models import Bread, Topping
from modules.menu.services.menu_service import MenuService
from modules.menu.utils.names import get_localized_name
from modules.notifications.schemas.notification_schemas import OrderNotification
from ..enums.order_enums import OrderStatus, PaymentMethod, DeliveryMethod
from ..models.order_models import Order
from ..schemas.order_schemas import CheckoutRequest
from .pricing_service import compute_item_price

logger = logging.getLogger(__name__)


@dataclass
class CheckoutLine:
    bread: Bread
    toppings: List[Topping]
    is_double_bread: bool
    quantity: int
    unit_price: Decimal
    orders: List[Order] = field(default_factory=list)


@dataclass
class CheckoutResult:
    orders: List[Order]
    lines: List[CheckoutLine]
    total_price: Decimal
    points_balance: Optional[Decimal] = None


def describe_sandwich(line: CheckoutLine, language) -> str:
    """e.g. ``Baguette + double pate with Tuna, Harissa``"""
    description = get_localized_name(line.bread.name, language)
    if line.is_double_bread:
        description += " + double pate"
    if line.toppings:
        description += " with " + ", ".join(
            get_localized_name(t.name, language) for t in line.toppings
        )
    return description


class CheckoutService:
    def __init__(self, db: Session):
        self.db = db
        self.menu_service = MenuService(db)
        self.loyalty_service = LoyaltyService(db)

    def price_cart(self, request: CheckoutRequest) -> List[CheckoutLine]:
        """Resolve every cart line against the catalog and price it."""
        lines = []
        for item in request.items:
            bread = self.menu_service.get_bread(item.bread_id)
            toppings = self.menu_service.get_toppings_by_ids(item.topping_ids)
            unit_price = compute_item_price(
                bread.price, item.is_double_bread, [t.price for t in toppings]
            )
            lines.append(
                CheckoutLine(
                    bread=bread,
                    toppings=toppings,
                    is_double_bread=item.is_double_bread,
                    quantity=item.quantity,
                    unit_price=unit_price,
                )
            )
        return lines

    def checkout(self, request: CheckoutRequest) -> CheckoutResult:
        """
        Place the orders of a cart in a single transaction.

        With points, the whole cart total is redeemed once before the orders
        are written; if anything fails nothing is committed, so points are
        never spent on orders that were not stored.
        """
        lines = self.price_cart(request)
        total_price = sum((l.unit_price * l.quantity for l in lines), Decimal("0"))
        paying_with_points = request.payment_method == PaymentMethod.POINTS
        points_balance = None

        try:
            if paying_with_points:
                account = self.loyalty_service.redeem_points(
                    request.phone_number, points_for_price(total_price), commit=False
                )
                points_balance = account.total_points

            orders = []
            for line in lines:
                for _ in range(line.quantity):
                    order = self._build_order(request, line)
                    self.db.add(order)
                    line.orders.append(order)
                    orders.append(order)

            self.db.commit()
        except InsufficientPointsError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Checkout failed for {request.phone_number}: {str(e)}")
            raise OrderPersistenceError(details={"phone_number": request.phone_number})

        for order in orders:
            self.db.refresh(order)

        logger.info(
            f"Checkout for {request.phone_number}: {len(orders)} order(s), "
            f"total {total_price}, paid with {request.payment_method.value}"
        )
        return CheckoutResult(
            orders=orders,
            lines=lines,
            total_price=total_price,
            points_balance=points_balance,
        )

    def _build_order(self, request: CheckoutRequest, line: CheckoutLine) -> Order:
        is_shipping = request.delivery_method == DeliveryMethod.SHIPPING
        return Order(
            customer_name=request.customer_name,
            phone_number=request.phone_number,
            bread_id=line.bread.id,
            is_double_bread=line.is_double_bread,
            toppings=[
                {
                    "id": t.id,
                    "name": t.name,
                    "price": float(t.price),
                    "category": t.category,
                }
                for t in line.toppings
            ],
            total_price=line.unit_price,
            status=OrderStatus.AWAITING_CONFIRMATION.value,
            payment_method=request.payment_method.value,
            note=request.note,
            delivery_method=request.delivery_method.value,
            pickup_time=None if is_shipping else request.scheduled_time,
            shipping_time=request.scheduled_time if is_shipping else None,
        )

    def build_notifications(
        self, request: CheckoutRequest, result: CheckoutResult
    ) -> List[OrderNotification]:
        """One alert per cart line, with the price of a single sandwich."""
        placed_at = format_shop_time(shop_now())
        notifications = []
        for line in result.lines:
            notifications.append(
                OrderNotification(
                    username=request.customer_name,
                    phone_number=request.phone_number,
                    sandwich=describe_sandwich(line, request.language),
                    price=line.unit_price,
                    time=placed_at,
                    payment_method=request.payment_method,
                    note=request.note,
                    delivery_method=request.delivery_method,
                    pickup_time=request.scheduled_time
                    if request.delivery_method == DeliveryMethod.PICKUP
                    else None,
                    shipping_time=request.scheduled_time
                    if request.delivery_method == DeliveryMethod.SHIPPING
                    else None,
                )
            )
        return notifications
