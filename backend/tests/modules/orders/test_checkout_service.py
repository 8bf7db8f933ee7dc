# backend/tests/modules/orders/test_checkout_service.py

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from core.error_handling import (
    InsufficientPointsError,
    NotFoundError,
    OrderPersistenceError,
)
from core.translations import Language
from modules.loyalty.models.loyalty_models import PointsTransaction
from modules.loyalty.services.loyalty_service import LoyaltyService
from modules.orders.enums.order_enums import OrderStatus, PaymentMethod, DeliveryMethod
from modules.orders.models.order_models import Order
from modules.orders.schemas.order_schemas import CheckoutItem, CheckoutRequest
from modules.orders.services.checkout_service import CheckoutService
from tests.factories import BreadFactory, ToppingFactory

PHONE = "22123456"


@pytest.fixture
def checkout_service(db_session):
    return CheckoutService(db_session)


@pytest.fixture
def bread(db_session):
    return BreadFactory(name="Baguette, Baguette", price=Decimal("2.000"))


@pytest.fixture
def toppings(db_session):
    return [
        ToppingFactory(name="Tuna, Thon", price=Decimal("1.500"), category="meats"),
        ToppingFactory(name="Cheese, Fromage", price=Decimal("0.500"), category="extra"),
    ]


def make_request(bread, toppings, quantity=1, **overrides):
    data = dict(
        customer_name="Amira",
        phone_number=PHONE,
        payment_method=PaymentMethod.CASH,
        items=[
            CheckoutItem(
                bread_id=bread.id,
                topping_ids=[t.id for t in toppings],
                quantity=quantity,
            )
        ],
    )
    data.update(overrides)
    return CheckoutRequest(**data)


class TestCashCheckout:
    def test_one_order_per_quantity_unit(self, checkout_service, bread, toppings, db_session):
        result = checkout_service.checkout(make_request(bread, toppings, quantity=3))

        assert len(result.orders) == 3
        assert result.total_price == Decimal("12.000")
        assert result.points_balance is None
        for order in result.orders:
            assert order.status == OrderStatus.AWAITING_CONFIRMATION.value
            assert order.total_price == Decimal("4.000")
            assert order.payment_method == "cash"
            assert [t["name"] for t in order.toppings] == ["Tuna, Thon", "Cheese, Fromage"]
        assert db_session.query(Order).count() == 3
        assert db_session.query(PointsTransaction).count() == 0

    def test_double_bread_line(self, checkout_service, bread, toppings):
        request = make_request(bread, toppings)
        request.items[0].is_double_bread = True

        result = checkout_service.checkout(request)

        assert result.orders[0].total_price == Decimal("6.000")
        assert result.orders[0].is_double_bread is True

    def test_scheduled_time_goes_to_the_delivery_column(self, checkout_service, bread, toppings):
        slot = datetime(2026, 3, 2, 12, 30)

        pickup = checkout_service.checkout(
            make_request(bread, toppings, scheduled_time=slot)
        ).orders[0]
        shipping = checkout_service.checkout(
            make_request(
                bread, toppings, scheduled_time=slot,
                delivery_method=DeliveryMethod.SHIPPING,
            )
        ).orders[0]

        assert pickup.pickup_time == slot and pickup.shipping_time is None
        assert shipping.shipping_time == slot and shipping.pickup_time is None

    def test_note_is_truncated(self, checkout_service, bread, toppings):
        result = checkout_service.checkout(make_request(bread, toppings, note="x" * 80))

        assert result.orders[0].note == "x" * 50

    def test_unknown_topping(self, checkout_service, bread, db_session):
        request = make_request(bread, [])
        request.items[0].topping_ids = [999]

        with pytest.raises(NotFoundError):
            checkout_service.checkout(request)
        assert db_session.query(Order).count() == 0


class TestPointsCheckout:
    def test_redeems_once_for_whole_cart(self, checkout_service, bread, toppings, db_session):
        LoyaltyService(db_session).admin_adjust_points(PHONE, "Amira", Decimal("20"))

        result = checkout_service.checkout(
            make_request(bread, toppings, quantity=3, payment_method=PaymentMethod.POINTS)
        )

        assert len(result.orders) == 3
        assert result.points_balance == Decimal("8")
        spends = (
            db_session.query(PointsTransaction)
            .filter(PointsTransaction.type == "spend")
            .all()
        )
        assert len(spends) == 1
        assert spends[0].amount == Decimal("-12")
        assert spends[0].reason == "Redeem at checkout"

    def test_insufficient_points_creates_nothing(self, checkout_service, bread, toppings, db_session):
        LoyaltyService(db_session).admin_adjust_points(PHONE, "Amira", Decimal("3.999"))

        with pytest.raises(InsufficientPointsError):
            checkout_service.checkout(
                make_request(bread, toppings, payment_method=PaymentMethod.POINTS)
            )

        assert db_session.query(Order).count() == 0
        assert LoyaltyService(db_session).get_account(PHONE).total_points == Decimal("3.999")

    def test_no_account_cannot_pay_with_points(self, checkout_service, bread, toppings):
        with pytest.raises(InsufficientPointsError):
            checkout_service.checkout(
                make_request(bread, toppings, payment_method=PaymentMethod.POINTS)
            )

    def test_failed_write_keeps_points(self, checkout_service, bread, toppings, db_session):
        LoyaltyService(db_session).admin_adjust_points(PHONE, "Amira", Decimal("10"))

        with patch.object(
            db_session, "commit", side_effect=OperationalError("INSERT", {}, Exception("disk I/O"))
        ):
            with pytest.raises(OrderPersistenceError) as exc_info:
                checkout_service.checkout(
                    make_request(bread, toppings, payment_method=PaymentMethod.POINTS)
                )

        assert exc_info.value.status_code == 503
        assert db_session.query(Order).count() == 0
        assert LoyaltyService(db_session).get_account(PHONE).total_points == Decimal("10")
        assert LoyaltyService(db_session).check_consistency(PHONE)["consistent"] is True


class TestNotifications:
    def test_one_notification_per_cart_line(self, checkout_service, bread, toppings):
        request = make_request(bread, toppings, quantity=2, language=Language.FR)
        request.items.append(CheckoutItem(bread_id=bread.id, is_double_bread=True))

        result = checkout_service.checkout(request)
        notifications = checkout_service.build_notifications(request, result)

        assert len(result.orders) == 3
        assert len(notifications) == 2
        assert notifications[0].sandwich == "Baguette with Thon, Fromage"
        assert notifications[0].price == Decimal("4.000")
        assert notifications[1].sandwich == "Baguette + double pate"
        assert notifications[1].payment_method == PaymentMethod.CASH
