# backend/modules/notifications/routes/telegram_routes.py

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..schemas.notification_schemas import OrderNotification, NotificationResult
from ..services.telegram_service import (
    TelegramNotificationService,
    get_notification_service,
)

router = APIRouter(prefix="/api/telegram", tags=["Notifications"])


@router.post(
    "/notify",
    response_model=NotificationResult,
    responses={500: {"model": NotificationResult}},
)
async def notify_order(
    notification: OrderNotification,
    notification_service: TelegramNotificationService = Depends(
        get_notification_service
    ),
):
    """Relay an order alert to the shop chat."""
    if await notification_service.send_order_notification(notification):
        return NotificationResult(
            success=True, message="Telegram notification sent successfully"
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=NotificationResult(
            success=False, message="Failed to send Telegram notification"
        ).model_dump(),
    )
