# backend/tests/modules/notifications/test_telegram_service.py

"""
Tests for the Telegram order alerts. The HTTP client is always mocked.
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, Mock, patch

import httpx

from modules.notifications.schemas.notification_schemas import OrderNotification
from modules.orders.enums.order_enums import DeliveryMethod, PaymentMethod
from modules.notifications.services.telegram_service import (
    TelegramNotificationService,
    format_order_message,
)


@pytest.fixture
def notification():
    return OrderNotification(
        username="Amira",
        phone_number="22123456",
        sandwich="Baguette with Tuna, Harissa",
        price=Decimal("4.5"),
        time="03/02/2026, 12:10:00",
        payment_method="cash",
        note="No onions",
        delivery_method="pickup",
        pickup_time=datetime(2026, 3, 2, 12, 30),
    )


def telegram_response(status_code=200, body=None):
    response = Mock()
    response.status_code = status_code
    response.text = str(body)
    response.json.return_value = body if body is not None else {"ok": True}
    if status_code >= 500 or status_code == 429:
        request = httpx.Request("POST", "https://api.telegram.org")
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "server error", request=request, response=Mock(status_code=status_code)
        )
    return response


@pytest.fixture
def http_client():
    client = Mock()
    client.post = AsyncMock(return_value=telegram_response())
    return client


@pytest.fixture
def service(http_client):
    return TelegramNotificationService(
        bot_token="123:abc",
        chat_id="-100",
        max_attempts=3,
        initial_delay=0,
        http_client=http_client,
    )


class TestFormatOrderMessage:
    def test_pickup_message(self, notification):
        message = format_order_message(notification)

        assert message.startswith("🍞 New Order Alert! 🍞\n\n👤 User: Amira\n")
        assert "📱 Phone: 22123456\n" in message
        assert "💰 Price: 4.50 TND\n" in message
        assert "💳 Payment: 💵 Cash\n" in message
        assert "⏰ Time: 03/02/2026, 12:10:00\n" in message
        assert "📝 Note: No onions\n" in message
        assert "🚚 Delivery: pickup\n" in message
        assert "🕒 Pickup time: 12:30\n" in message
        assert message.endswith("Order placed successfully! 🎉")

    def test_customer_text_is_html_escaped(self, notification):
        notification.username = "Sami & Co"
        notification.note = "no onions <3"

        message = format_order_message(notification)

        assert "👤 User: Sami &amp; Co\n" in message
        assert "📝 Note: no onions &lt;3\n" in message
        assert "<3" not in message

    def test_shipping_with_points_and_no_note(self, notification):
        notification.payment_method = PaymentMethod.POINTS
        notification.delivery_method = DeliveryMethod.SHIPPING
        notification.note = None
        notification.shipping_time = None

        message = format_order_message(notification)

        assert "💳 Payment: 💎 Points\n" in message
        assert "📝 Note: -\n" in message
        assert "🕒 Shipping time: -\n" in message


class TestSendOrderNotification:
    @pytest.mark.asyncio
    async def test_posts_to_send_message(self, service, http_client, notification):
        assert await service.send_order_notification(notification) is True

        url = http_client.post.call_args.args[0]
        payload = http_client.post.call_args.kwargs["json"]
        assert url == "https://api.telegram.org/bot123:abc/sendMessage"
        assert payload["chat_id"] == "-100"
        assert payload["parse_mode"] == "HTML"
        assert "Amira" in payload["text"]

    @pytest.mark.asyncio
    async def test_retries_transport_errors(self, service, http_client, notification):
        http_client.post.side_effect = [
            httpx.ConnectError("boom"),
            telegram_response(status_code=502),
            telegram_response(),
        ]

        with patch("asyncio.sleep", new=AsyncMock()) as sleep:
            assert await service.send_order_notification(notification) is True

        assert http_client.post.await_count == 3
        assert sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self, service, http_client, notification):
        http_client.post.side_effect = httpx.ReadTimeout("slow")

        assert await service.send_order_notification(notification) is False
        assert http_client.post.await_count == 3

    @pytest.mark.asyncio
    async def test_rejected_message_is_not_retried(self, service, http_client, notification):
        http_client.post.return_value = telegram_response(
            status_code=400, body={"ok": False, "description": "chat not found"}
        )

        assert await service.send_order_notification(notification) is False
        assert http_client.post.await_count == 1

    @pytest.mark.asyncio
    async def test_not_ok_body_is_a_failure(self, service, http_client, notification):
        http_client.post.return_value = telegram_response(body={"ok": False})

        assert await service.send_order_notification(notification) is False

    @pytest.mark.asyncio
    async def test_skipped_without_credentials(self, http_client, notification):
        service = TelegramNotificationService(
            bot_token="", chat_id="", http_client=http_client
        )

        assert await service.send_order_notification(notification) is False
        http_client.post.assert_not_awaited()


class TestSendOrderNotifications:
    @pytest.mark.asyncio
    async def test_counts_delivered_and_never_raises(self, service, notification):
        service.send_order_notification = AsyncMock(
            side_effect=[True, RuntimeError("unexpected"), False]
        )

        delivered = await service.send_order_notifications([notification] * 3)

        assert delivered == 1
        assert service.send_order_notification.await_count == 3
