# backend/modules/notifications/services/telegram_service.py

"""
Telegram order alerts.

Alerts are best effort: delivery is retried with exponential backoff and a
final failure is logged, never raised, so an order is never held back by the
chat being unreachable.
"""

import asyncio
import html
import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

import httpx

from core.clock import shop_timezone
from core.config import settings
from core.error_handling import NotificationError
from modules.orders.enums.order_enums import PaymentMethod, DeliveryMethod
from ..schemas.notification_schemas import OrderNotification

logger = logging.getLogger(__name__)


def _format_slot_time(moment: Optional[datetime]) -> str:
    if moment is None:
        return "-"
    if moment.tzinfo is not None:
        moment = moment.astimezone(shop_timezone())
    return moment.strftime("%H:%M")


def format_order_message(notification: OrderNotification) -> str:
    """Render the alert text posted to the shop chat. Free text is HTML-escaped."""
    price = Decimal(notification.price).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    payment = (
        "💎 Points"
        if notification.payment_method == PaymentMethod.POINTS
        else "💵 Cash"
    )
    if notification.delivery_method == DeliveryMethod.SHIPPING:
        slot_label = "Shipping time"
        slot_time = _format_slot_time(notification.shipping_time)
    else:
        slot_label = "Pickup time"
        slot_time = _format_slot_time(notification.pickup_time)

    return (
        "🍞 New Order Alert! 🍞\n"
        "\n"
        f"👤 User: {html.escape(notification.username)}\n"
        f"📱 Phone: {html.escape(notification.phone_number)}\n"
        f"🥪 Sandwich: {html.escape(notification.sandwich)}\n"
        f"💰 Price: {price} TND\n"
        f"💳 Payment: {payment}\n"
        f"⏰ Time: {notification.time}\n"
        f"📝 Note: {html.escape(notification.note or '-')}\n"
        f"🚚 Delivery: {notification.delivery_method.value}\n"
        f"🕒 {slot_label}: {slot_time}\n"
        "\n"
        "Order placed successfully! 🎉"
    )


class TelegramNotificationService:
    """Sends order alerts through the Telegram Bot API"""

    def __init__(
        self,
        bot_token: Optional[str] = None,
        chat_id: Optional[str] = None,
        api_base_url: Optional[str] = None,
        max_attempts: Optional[int] = None,
        initial_delay: Optional[float] = None,
        backoff_factor: Optional[float] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.bot_token = bot_token if bot_token is not None else settings.telegram_bot_token
        self.chat_id = chat_id if chat_id is not None else settings.telegram_chat_id
        self.api_base_url = (api_base_url or settings.telegram_api_base_url).rstrip("/")
        self.max_attempts = max(1, max_attempts or settings.notification_max_attempts)
        self.initial_delay = (
            initial_delay
            if initial_delay is not None
            else settings.notification_initial_delay_seconds
        )
        self.backoff_factor = backoff_factor or settings.notification_backoff_factor
        self.timeout = timeout or settings.notification_http_timeout_seconds
        self.http_client = http_client

    @property
    def enabled(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    @property
    def send_message_url(self) -> str:
        return f"{self.api_base_url}/bot{self.bot_token}/sendMessage"

    async def _post_message(self, text: str) -> None:
        """
        Post one message.

        Raises:
            NotificationError: if Telegram rejected the message
            httpx.HTTPError: on transport errors, timeouts and 5xx/429 answers
        """
        payload = {"chat_id": self.chat_id, "text": text, "parse_mode": "HTML"}

        if self.http_client is not None:
            response = await self.http_client.post(self.send_message_url, json=payload)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.send_message_url, json=payload)

        if response.status_code >= 500 or response.status_code == 429:
            response.raise_for_status()
        if response.status_code >= 400:
            raise NotificationError(
                f"Telegram API error {response.status_code}: {response.text}"
            )
        try:
            body = response.json()
        except ValueError:
            raise NotificationError(f"Unexpected Telegram response: {response.text}")
        if not body.get("ok"):
            raise NotificationError(f"Telegram refused the message: {response.text}")

    async def send_order_notification(self, notification: OrderNotification) -> bool:
        """Send one alert. Returns whether it was delivered."""
        if not self.enabled:
            logger.warning("Telegram credentials are not configured; alert skipped")
            return False

        text = format_order_message(notification)
        delay = self.initial_delay

        for attempt in range(1, self.max_attempts + 1):
            try:
                await self._post_message(text)
                logger.info(
                    f"Telegram alert sent for {notification.phone_number} "
                    f"(attempt {attempt})"
                )
                return True
            except NotificationError as e:
                logger.error(f"Telegram alert rejected: {str(e)}")
                return False
            except httpx.HTTPError as e:
                if attempt == self.max_attempts:
                    logger.error(
                        f"Telegram alert failed after {attempt} attempts: {str(e)}"
                    )
                    return False
                logger.warning(
                    f"Telegram alert attempt {attempt}/{self.max_attempts} failed. "
                    f"Retrying in {delay:.2f}s. Error: {str(e)}"
                )
                await asyncio.sleep(delay)
                delay *= self.backoff_factor

        return False

    async def send_order_notifications(
        self, notifications: Iterable[OrderNotification]
    ) -> int:
        """Send alerts one after another; returns how many were delivered."""
        delivered = 0
        for notification in notifications:
            try:
                if await self.send_order_notification(notification):
                    delivered += 1
            except Exception as e:
                logger.error(f"Unexpected error while sending Telegram alert: {str(e)}")
        return delivered


def get_notification_service() -> TelegramNotificationService:
    """Dependency to get the notification service"""
    return TelegramNotificationService()
