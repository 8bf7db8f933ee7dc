# backend/tests/modules/orders/test_order_status.py

import pytest
from decimal import Decimal

from core.error_handling import NotFoundError
from modules.loyalty.models.loyalty_models import PointsTransaction
from modules.loyalty.services.loyalty_service import LoyaltyService
from modules.orders.enums.order_enums import OrderStatus, PaymentMethod
from modules.orders.services.order_service import OrderService
from tests.factories import OrderFactory

PHONE = "22123456"


@pytest.fixture
def order_service(db_session):
    return OrderService(db_session)


def earn_count(db_session):
    return (
        db_session.query(PointsTransaction)
        .filter(PointsTransaction.type == "earn")
        .count()
    )


class TestTransitions:
    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_any_status_is_reachable(self, order_service, db_session, target):
        order = OrderFactory(status=OrderStatus.DELIVERY.value)

        updated = order_service.transition_order_status(order.id, target)

        assert updated.status == target.value

    def test_unknown_order(self, order_service):
        with pytest.raises(NotFoundError):
            order_service.transition_order_status(404, OrderStatus.CONFIRMED)


class TestDelivery:
    def test_cash_delivery_awards_once(self, order_service, db_session):
        order = OrderFactory(phone_number=PHONE, total_price=Decimal("20.00"))

        delivered = order_service.transition_order_status(order.id, OrderStatus.DELIVERED)
        order_service.transition_order_status(order.id, OrderStatus.DELIVERED)

        assert delivered.delivered_at is not None
        assert earn_count(db_session) == 1
        assert LoyaltyService(db_session).get_account(PHONE).total_points == Decimal("1")

    def test_redelivery_after_status_change_does_not_award_again(
        self, order_service, db_session
    ):
        order = OrderFactory(phone_number=PHONE, total_price=Decimal("20.00"))

        first = order_service.transition_order_status(order.id, OrderStatus.DELIVERED)
        delivered_at = first.delivered_at
        order_service.transition_order_status(order.id, OrderStatus.CONFIRMED)
        again = order_service.transition_order_status(order.id, OrderStatus.DELIVERED)

        assert again.delivered_at == delivered_at
        assert earn_count(db_session) == 1
        assert LoyaltyService(db_session).check_consistency(PHONE)["consistent"] is True

    def test_points_order_earns_nothing(self, order_service, db_session):
        order = OrderFactory(
            phone_number=PHONE,
            total_price=Decimal("20.00"),
            payment_method=PaymentMethod.POINTS.value,
        )

        delivered = order_service.transition_order_status(order.id, OrderStatus.DELIVERED)

        assert delivered.delivered_at is not None
        assert earn_count(db_session) == 0
        assert LoyaltyService(db_session).find_account(PHONE) is None


class TestCancellation:
    def test_cancel_and_uncancel(self, order_service, db_session):
        order = OrderFactory(status=OrderStatus.IN_PREPARATION.value)

        assert order_service.cancel_order(order.id).status == "cancelled"
        assert order_service.uncancel_order(order.id).status == "confirmed"
        assert db_session.query(PointsTransaction).count() == 0

    def test_uncancel_requires_cancelled_order(self, order_service):
        order = OrderFactory(status=OrderStatus.CONFIRMED.value)

        with pytest.raises(ValueError):
            order_service.uncancel_order(order.id)


class TestQueries:
    def test_list_filters_by_status(self, order_service):
        OrderFactory(status=OrderStatus.CONFIRMED.value)
        OrderFactory(status=OrderStatus.CANCELLED.value)

        orders = order_service.list_orders(status=OrderStatus.CONFIRMED)

        assert [o.status for o in orders] == ["confirmed"]

    def test_list_by_phone_newest_first(self, order_service):
        first = OrderFactory(phone_number=PHONE)
        second = OrderFactory(phone_number=PHONE)
        OrderFactory(phone_number="99999999")

        orders = order_service.list_orders_by_phone(PHONE)

        assert [o.id for o in orders] == [second.id, first.id]
